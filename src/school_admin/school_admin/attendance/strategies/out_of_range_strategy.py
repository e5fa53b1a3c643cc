from __future__ import annotations

from ...core.enums import DutyStatus
from .base import DutyCheckStrategy, StatusDecision


class OutOfRangeStrategy(DutyCheckStrategy):
    """Outside the radius; the user has to confirm before it is saved."""

    def decide(self, *, distance: int, radius: int) -> StatusDecision:
        return StatusDecision(
            status=DutyStatus.OUT_OF_RANGE,
            requires_confirmation=True,
            note=f"อยู่นอกระยะ ({distance} ม.) ยืนยันลงชื่อหรือไม่?",
        )
