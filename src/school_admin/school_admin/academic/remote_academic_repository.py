from __future__ import annotations

from typing import Sequence

from ..core.enums import PlanStatus
from ..sync.remote_base import RemoteRecordStore
from .model import ACADEMIC_FILES, AcademicPlan
from .repository import AcademicPlanRepository


class RemoteAcademicPlanRepository(AcademicPlanRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[AcademicPlan]:
        return [AcademicPlan.from_remote(r) for r in self._store.fetch_sheet("academicPlans")]

    def save(self, plan: AcademicPlan) -> AcademicPlan:
        saved = self._store.save("saveAcademicPlan", plan.to_remote(), ACADEMIC_FILES)
        return AcademicPlan.from_remote(saved) if saved else plan

    def update_status(
        self, *, plan_id: int, status: PlanStatus, comment: str, approver_name: str, approved_date: str
    ) -> None:
        self._store.call(
            "updateAcademicPlanStatus",
            data={
                "id": plan_id,
                "status": status.value,
                "comment": comment,
                "approverName": approver_name,
                "approvedDate": approved_date,
            },
        )
