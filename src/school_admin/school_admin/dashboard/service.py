from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..common.dates import today_display
from ..core.enums import AttendanceStatus, LeaveStatus, PersonnelStatus, PlanStatus, ProcurementStatus, Role
from ..core.exceptions import AuthorizationError
from ..users.model import Personnel
from ..users.service import AuthService
from .model import SchoolData, merge_settings
from .repository import SchoolDataRepository

_PRESENT = (AttendanceStatus.PRESENT, AttendanceStatus.ACTIVITY)


class DashboardService:
    """Use case: one ``getAllData`` round trip feeding the landing dashboard."""

    def __init__(self, data: SchoolDataRepository, auth: AuthService):
        self._data = data
        self._auth = auth

    def load(self) -> SchoolData:
        return SchoolData.from_remote(self._data.load_all(), personnel_hook=self._auth.apply_admin_override)

    def summary(self, *, today: Optional[date] = None) -> dict:
        data = self.load()
        day = today_display(today)

        def present(rows):
            return sum(1 for r in rows if r.date == day and r.status in _PRESENT)

        return {
            "date": day,
            "personnel": sum(1 for p in data.personnel if p.status == PersonnelStatus.APPROVED),
            "pendingPersonnel": sum(1 for p in data.personnel if p.status == PersonnelStatus.PENDING),
            "students": len(data.students),
            "studentsPresentToday": present(data.student_attendance),
            "personnelPresentToday": present(data.personnel_attendance),
            "pendingPlans": sum(1 for p in data.academic_plans if p.status == PlanStatus.PENDING),
            "pendingProcurements": sum(1 for r in data.procurements if r.status == ProcurementStatus.PENDING),
            "dutyToday": sum(1 for r in data.duty_records if r.date == day),
            "dormitoryReportsToday": sum(1 for r in data.dormitory_reports if r.report_date == day),
            "pendingLeave": sum(1 for r in data.leave_records if r.status == LeaveStatus.PENDING),
        }


class SettingsService:
    def __init__(self, data: SchoolDataRepository):
        self._data = data

    def get(self) -> dict:
        loaded = self._data.load_all()
        return merge_settings(loaded.get("settings") if isinstance(loaded, Mapping) else None)

    def update(self, *, current: Personnel, changes: Mapping[str, Any]) -> dict:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์แก้ไขการตั้งค่า")
        settings = self.get()
        settings.update(changes)
        settings.pop("schoolLogoUrl", None)
        saved = self._data.save_settings(settings)
        return merge_settings(saved if isinstance(saved, Mapping) else settings)
