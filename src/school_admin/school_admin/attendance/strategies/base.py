from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import DutyStatus


@dataclass(frozen=True)
class StatusDecision:
    status: DutyStatus
    requires_confirmation: bool = False
    note: Optional[str] = None


class DutyCheckStrategy(ABC):
    """Strategy Pattern: encapsulate how we classify a duty check-in location."""

    @abstractmethod
    def decide(self, *, distance: int, radius: int) -> StatusDecision:
        raise NotImplementedError
