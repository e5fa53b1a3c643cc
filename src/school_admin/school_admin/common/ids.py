from __future__ import annotations

import time
from typing import Optional


def new_record_id(now: Optional[float] = None) -> int:
    """Millisecond timestamp ids, the same scheme the spreadsheet rows use."""
    return int((time.time() if now is None else now) * 1000)
