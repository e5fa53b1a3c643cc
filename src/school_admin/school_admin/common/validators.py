from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_TIME_RE = re.compile(r"^\s*(\d{1,2})\s*[:.]\s*(\d{1,2})")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"กรุณาระบุ{field_name}")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name}ต้องมีอย่างน้อย {min_len} ตัวอักษร")
    return value


def require_choice(value: Any, enum_cls, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name}ไม่ถูกต้อง")


def require_ids(values: Any) -> list[int]:
    """Parse a request's ``ids`` list; every item must be an integer id."""
    if not isinstance(values, (list, tuple, set, frozenset)):
        raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
    ids = []
    for value in values:
        if isinstance(value, bool):
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        try:
            ids.append(int(str(value).strip()))
        except ValueError:
            raise ValidationError("รูปแบบข้อมูลไม่ถูกต้อง")
    if not ids:
        raise ValidationError("กรุณาเลือกรายการที่ต้องการลบ")
    return ids


def to_int(value: Any, default: int = 0) -> int:
    """Spreadsheet cells come back as int, float or numeric string."""
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return default


def normalize_time(value: Any) -> Optional[str]:
    """``8:5`` / ``08.05`` / ``08:05:00`` -> ``08:05``; None if unreadable."""
    if not isinstance(value, str):
        return None
    if "T" in value:
        # Sheets hand back time cells as a full ISO timestamp.
        value = value.split("T", 1)[1]
    m = _TIME_RE.match(value)
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def to_enum(value: Any, enum_cls, default):
    """Lenient enum read for stored rows; unknown values fall back to ``default``."""
    try:
        return enum_cls(value)
    except ValueError:
        return default
