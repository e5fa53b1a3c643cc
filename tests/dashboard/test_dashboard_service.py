from __future__ import annotations

from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import Role
from src.school_admin.school_admin.core.exceptions import AuthorizationError
from src.school_admin.school_admin.dashboard.model import SchoolData, merge_settings, public_settings
from src.school_admin.school_admin.dashboard.service import DashboardService, SettingsService
from src.school_admin.school_admin.users.model import Personnel
from src.school_admin.school_admin.users.service import AuthService

DAY = "15/03/2567"


class FakeSchoolData:
    def __init__(self, data):
        self.data = data
        self.saved_settings = []

    def load_all(self):
        return self.data

    def save_settings(self, settings):
        self.saved_settings.append(dict(settings))
        return dict(settings)


def _payload():
    return {
        "personnel": [
            {"id": 1, "personnelName": "ผู้ดูแล", "idCard": "1111111111111", "status": "approved"},
            {"id": 2, "personnelName": "ครูใหม่", "idCard": "2222222222222", "status": "pending"},
            {"id": 3, "personnelName": "ครูเก่า", "idCard": "3333333333333"},
        ],
        "students": [{"id": 10, "studentName": "ก"}, {"id": 11, "studentName": "ข"}],
        "studentAttendance": [
            {"id": "a", "date": DAY, "period": "morning", "studentId": 10, "status": "present"},
            {"id": "b", "date": DAY, "period": "morning", "studentId": 11, "status": "sick"},
        ],
        "personnelAttendance": [
            {"id": "c", "date": DAY, "period": "morning", "personnelId": 1, "status": "activity"},
        ],
        "academicPlans": [{"id": 5, "status": "pending"}, {"id": 6, "status": "approved"}],
        "supplyRequests": [{"id": 7, "status": "pending", "items": "[]"}],
        "dutyRecords": [{"id": 8, "date": DAY, "type": "check_in"}, {"id": 9, "date": "14/03/2567"}],
        "reports": [
            {"id": 12, "reportDate": DAY, "dormitory": "ภูพาน", "studentDetails": [{"name": "ก", "status": "sick"}]},
        ],
        "leaveRecords": [
            {"id": 13, "personnelId": 3, "type": "ลาป่วย", "status": "pending"},
            {"id": 14, "status": "approved"},
        ],
        "settings": {"schoolName": "โรงเรียนทดสอบ", "adminPassword": "hidden", "schoolLogo": None},
    }


def _dashboard(payload):
    auth = AuthService(personnel=None, users=None, admin_id_card="1111111111111")
    return DashboardService(FakeSchoolData(payload), auth)


def test_load_applies_admin_override_and_legacy_status():
    data = _dashboard(_payload()).load()

    assert isinstance(data, SchoolData)
    roles = {p.personnel_id: p.role for p in data.personnel}
    assert roles == {1: Role.ADMIN, 2: Role.USER, 3: Role.USER}
    assert data.settings["schoolName"] == "โรงเรียนทดสอบ"
    assert data.settings["checkInRadius"] == 200


def test_summary_counts_today():
    summary = _dashboard(_payload()).summary(today=date(2024, 3, 15))

    assert summary == {
        "date": DAY,
        "personnel": 2,
        "pendingPersonnel": 1,
        "students": 2,
        "studentsPresentToday": 1,
        "personnelPresentToday": 1,
        "pendingPlans": 1,
        "pendingProcurements": 1,
        "dutyToday": 1,
        "dormitoryReportsToday": 1,
        "pendingLeave": 1,
    }


def test_garbage_payload_gives_empty_data():
    data = SchoolData.from_remote("not a dict")
    assert data.students == []
    assert data.settings["schoolName"]


def test_public_settings_hide_admin_password():
    settings = merge_settings({"adminPassword": "x", "schoolLogo": "https://drive.google.com/file/d/logo1/view"})
    assert "logo1" in settings["schoolLogoUrl"]
    assert "adminPassword" not in public_settings(settings)


def test_settings_update_is_admin_only():
    repo = FakeSchoolData(_payload())
    svc = SettingsService(repo)
    teacher = Personnel(personnel_id=2, title="", name="ครู", position="ครู", id_card="2")
    admin = Personnel(personnel_id=1, title="", name="ผู้ดูแล", position="ผอ.", id_card="1", role=Role.ADMIN)

    with pytest.raises(AuthorizationError):
        svc.update(current=teacher, changes={"schoolName": "x"})

    updated = svc.update(current=admin, changes={"checkInRadius": 350})

    assert updated["checkInRadius"] == 350
    assert updated["schoolName"] == "โรงเรียนทดสอบ"
    assert "schoolLogoUrl" not in repo.saved_settings[0]


def test_load_parses_dormitory_reports_and_leave():
    data = _dashboard(_payload()).load()

    report = data.dormitory_reports[0]
    assert report.dormitory == "ภูพาน"
    assert report.home_count is None
    assert report.details == [{"name": "ก", "status": "sick"}]
    assert [r.record_id for r in data.leave_records] == [13, 14]
    assert data.settings["leaveTypes"][0] == "ลาป่วย"
