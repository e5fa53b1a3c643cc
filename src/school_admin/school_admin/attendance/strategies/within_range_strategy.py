from __future__ import annotations

from ...core.enums import DutyStatus
from .base import DutyCheckStrategy, StatusDecision


class WithinRangeStrategy(DutyCheckStrategy):
    """Inside the school radius."""

    def decide(self, *, distance: int, radius: int) -> StatusDecision:
        return StatusDecision(status=DutyStatus.WITHIN_RANGE)
