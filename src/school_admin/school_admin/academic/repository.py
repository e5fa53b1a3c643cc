from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import PlanStatus
from .model import AcademicPlan


class AcademicPlanRepository(Protocol):
    def list_all(self) -> Sequence[AcademicPlan]:
        raise NotImplementedError

    def save(self, plan: AcademicPlan) -> AcademicPlan:
        raise NotImplementedError

    def update_status(
        self, *, plan_id: int, status: PlanStatus, comment: str, approver_name: str, approved_date: str
    ) -> None:
        raise NotImplementedError
