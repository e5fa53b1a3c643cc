from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.normalize import normalize_array
from ..common.validators import to_enum, to_int
from ..core.enums import PlanStatus
from ..files.model import EncodingPlan

ACADEMIC_FILES = EncodingPlan(array_fields=("courseStructureFile", "lessonPlanFile"))


@dataclass(frozen=True)
class AcademicPlan:
    """แผนการสอน / โครงสร้างรายวิชาที่ครูส่งให้ฝ่ายวิชาการตรวจ"""

    plan_id: int
    date: str
    teacher_id: int
    teacher_name: str
    learning_area: str
    subject_code: str
    subject_name: str
    course_structure_file: tuple[Any, ...] = ()
    lesson_plan_file: tuple[Any, ...] = ()
    additional_link: str = ""
    status: PlanStatus = PlanStatus.PENDING
    comment: str = ""
    approver_name: str = ""
    approved_date: str = ""

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "AcademicPlan":
        return cls(
            plan_id=to_int(row.get("id")),
            date=str(row.get("date") or ""),
            teacher_id=to_int(row.get("teacherId")),
            teacher_name=str(row.get("teacherName") or ""),
            learning_area=str(row.get("learningArea") or ""),
            subject_code=str(row.get("subjectCode") or ""),
            subject_name=str(row.get("subjectName") or ""),
            course_structure_file=tuple(normalize_array(row.get("courseStructureFile"))),
            lesson_plan_file=tuple(normalize_array(row.get("lessonPlanFile"))),
            additional_link=str(row.get("additionalLink") or ""),
            status=to_enum(row.get("status"), PlanStatus, PlanStatus.PENDING),
            comment=str(row.get("comment") or ""),
            approver_name=str(row.get("approverName") or ""),
            approved_date=str(row.get("approvedDate") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.plan_id,
            "date": self.date,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "learningArea": self.learning_area,
            "subjectCode": self.subject_code,
            "subjectName": self.subject_name,
            "courseStructureFile": list(self.course_structure_file),
            "lessonPlanFile": list(self.lesson_plan_file),
            "additionalLink": self.additional_link,
            "status": self.status.value,
            "comment": self.comment,
            "approverName": self.approver_name,
            "approvedDate": self.approved_date,
        }

    def to_ui(self) -> dict:
        out = self.to_remote()
        # Stored file lists may hold LocalFile handles right after a submit.
        out["courseStructureFile"] = [f for f in self.course_structure_file if isinstance(f, str)]
        out["lessonPlanFile"] = [f for f in self.lesson_plan_file if isinstance(f, str)]
        return out
