from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import DutyCheckStrategy
from .strategies.out_of_range_strategy import OutOfRangeStrategy
from .strategies.within_range_strategy import WithinRangeStrategy


@dataclass
class DutyStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on distance."""

    def for_distance(self, *, distance: int, radius: int) -> DutyCheckStrategy:
        if distance <= radius:
            return WithinRangeStrategy()
        return OutOfRangeStrategy()
