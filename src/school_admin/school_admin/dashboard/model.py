from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from ..academic.model import AcademicPlan
from ..attendance.model import DutyRecord, PersonnelAttendance, StudentAttendance
from ..dormitory.model import DormitoryReport
from ..common.normalize import first_image_source
from ..core.constants import DEFAULT_SETTINGS
from ..files.model import EncodingPlan
from ..leave.model import LeaveRecord
from ..nutrition.model import Ingredient, MealPlan
from ..service_registration.model import ServiceRecord
from ..students.model import Student
from ..supply.model import ProcurementRecord
from ..sync.remote_base import as_records
from ..users.model import Personnel

SETTINGS_FILES = EncodingPlan(data_uri_fields=("schoolLogo",))
PRIVATE_SETTING_KEYS = ("adminPassword",)


def merge_settings(stored: Optional[Mapping[str, Any]]) -> dict:
    out = dict(DEFAULT_SETTINGS)
    if isinstance(stored, Mapping):
        out.update({k: v for k, v in stored.items() if v is not None})
    out["schoolLogoUrl"] = first_image_source(out.get("schoolLogo")) or ""
    return out


def public_settings(settings: Mapping[str, Any]) -> dict:
    return {k: v for k, v in settings.items() if k not in PRIVATE_SETTING_KEYS}


@dataclass(frozen=True)
class SchoolData:
    """Every collection of ``getAllData``, parsed and normalized."""

    personnel: list[Personnel] = field(default_factory=list)
    students: list[Student] = field(default_factory=list)
    student_attendance: list[StudentAttendance] = field(default_factory=list)
    personnel_attendance: list[PersonnelAttendance] = field(default_factory=list)
    academic_plans: list[AcademicPlan] = field(default_factory=list)
    service_records: list[ServiceRecord] = field(default_factory=list)
    meal_plans: list[MealPlan] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    duty_records: list[DutyRecord] = field(default_factory=list)
    procurements: list[ProcurementRecord] = field(default_factory=list)
    dormitory_reports: list[DormitoryReport] = field(default_factory=list)
    leave_records: list[LeaveRecord] = field(default_factory=list)
    settings: dict = field(default_factory=lambda: merge_settings(None))

    @classmethod
    def from_remote(
        cls, data: Any, *, personnel_hook: Callable[[Personnel], Personnel] = lambda p: p
    ) -> "SchoolData":
        if not isinstance(data, Mapping):
            data = {}

        def rows(key: str) -> list[dict]:
            return as_records(data.get(key))

        return cls(
            personnel=[personnel_hook(Personnel.from_remote(r)) for r in rows("personnel")],
            students=[Student.from_remote(r) for r in rows("students")],
            student_attendance=[StudentAttendance.from_remote(r) for r in rows("studentAttendance")],
            personnel_attendance=[PersonnelAttendance.from_remote(r) for r in rows("personnelAttendance")],
            academic_plans=[AcademicPlan.from_remote(r) for r in rows("academicPlans")],
            service_records=[ServiceRecord.from_remote(r) for r in rows("serviceRecords")],
            meal_plans=[MealPlan.from_remote(r) for r in rows("mealPlans")],
            ingredients=[Ingredient.from_remote(r) for r in rows("ingredients")],
            duty_records=[DutyRecord.from_remote(r) for r in rows("dutyRecords")],
            procurements=[ProcurementRecord.from_remote(r) for r in rows("supplyRequests")],
            dormitory_reports=[DormitoryReport.from_remote(r) for r in rows("reports")],
            leave_records=[LeaveRecord.from_remote(r) for r in rows("leaveRecords")],
            settings=merge_settings(data.get("settings")),
        )
