from __future__ import annotations

from collections import Counter
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.dates import today_display
from ..common.ids import new_record_id
from ..common.validators import require_non_empty
from ..core.enums import PlanStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..files.model import LocalFile
from ..users.model import Personnel
from .model import AcademicPlan
from .repository import AcademicPlanRepository

REVIEWER_ROLES = {Role.PRO, Role.ADMIN}


def approval_order(plans: Sequence[AcademicPlan]) -> list[AcademicPlan]:
    """Pending first, newest first within each group."""
    return sorted(plans, key=lambda p: (p.status != PlanStatus.PENDING, -p.plan_id))


class AcademicPlanService:
    def __init__(self, plans: AcademicPlanRepository):
        self._plans = plans

    def list_for_review(self, *, teacher: str = "", subject: str = "") -> list[AcademicPlan]:
        teacher = (teacher or "").strip().lower()
        subject = (subject or "").strip().lower()
        return [
            p
            for p in approval_order(self._plans.list_all())
            if teacher in p.teacher_name.lower()
            and (subject in p.subject_name.lower() or subject in p.subject_code.lower())
        ]

    def list_mine(self, current: Personnel) -> list[AcademicPlan]:
        mine = [p for p in self._plans.list_all() if p.teacher_id == current.personnel_id]
        return sorted(mine, key=lambda p: p.plan_id, reverse=True)

    def stats(self) -> dict:
        plans = self._plans.list_all()
        return {
            "total": len(plans),
            "teachers": len({p.teacher_id for p in plans}),
            "approved": sum(1 for p in plans if p.status == PlanStatus.APPROVED),
            "byLearningArea": dict(Counter(p.learning_area for p in plans if p.learning_area)),
        }

    def submit(
        self,
        *,
        current: Personnel,
        learning_area: str,
        subject_code: str,
        subject_name: str,
        course_structure_file: Sequence[LocalFile | str] = (),
        lesson_plan_file: Sequence[LocalFile | str] = (),
        additional_link: str = "",
        today: Optional[date] = None,
    ) -> AcademicPlan:
        plan = AcademicPlan(
            plan_id=new_record_id(),
            date=today_display(today),
            teacher_id=current.personnel_id,
            teacher_name=current.full_name,
            learning_area=require_non_empty(learning_area, "กลุ่มสาระการเรียนรู้"),
            subject_code=require_non_empty(subject_code, "รหัสวิชา"),
            subject_name=require_non_empty(subject_name, "ชื่อวิชา"),
            course_structure_file=tuple(course_structure_file),
            lesson_plan_file=tuple(lesson_plan_file),
            additional_link=(additional_link or "").strip(),
        )
        if not plan.course_structure_file and not plan.lesson_plan_file and not plan.additional_link:
            raise ValidationError("กรุณาแนบไฟล์หรือระบุลิงก์อย่างน้อยหนึ่งรายการ")
        return self._plans.save(plan)

    def update_status(
        self,
        *,
        current: Personnel,
        plan_id: int,
        status: PlanStatus,
        comment: str = "",
        today: Optional[date] = None,
    ) -> AcademicPlan:
        if current.role not in REVIEWER_ROLES:
            raise AuthorizationError("คุณไม่มีสิทธิ์อนุมัติแผนการสอน")
        comment = (comment or "").strip()
        if status == PlanStatus.NEEDS_EDIT and not comment:
            raise ValidationError("กรุณาระบุข้อเสนอแนะสำหรับการแก้ไข")

        plan = next((p for p in self._plans.list_all() if p.plan_id == int(plan_id)), None)
        if plan is None:
            raise ValidationError("ไม่พบแผนการสอน")

        approved_date = today_display(today)
        self._plans.update_status(
            plan_id=plan.plan_id,
            status=status,
            comment=comment,
            approver_name=current.name,
            approved_date=approved_date,
        )
        return replace(plan, status=status, comment=comment, approver_name=current.name, approved_date=approved_date)
