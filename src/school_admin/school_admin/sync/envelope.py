from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import ResponseStatus


@dataclass(frozen=True)
class ResponseEnvelope:
    """``{status, data | message}`` wrapper every bridge call answers with."""

    status: ResponseStatus
    data: Any = None
    message: Optional[str] = None
    stack: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResponseStatus.SUCCESS

    @classmethod
    def from_json(cls, body: Mapping[str, Any]) -> "ResponseEnvelope":
        return cls(
            status=ResponseStatus(body.get("status")),
            data=body.get("data"),
            message=body.get("message"),
            stack=body.get("stack"),
        )
