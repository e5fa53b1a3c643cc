from __future__ import annotations

from datetime import datetime

import pytest

from src.school_admin.school_admin.core.enums import Role
from src.school_admin.school_admin.core.exceptions import AuthorizationError, ValidationError
from src.school_admin.school_admin.dashboard.service import SettingsService
from src.school_admin.school_admin.dormitory.model import DormitoryReport
from src.school_admin.school_admin.dormitory.service import DormitoryReportService, latest_per_dormitory
from src.school_admin.school_admin.students.model import Student
from src.school_admin.school_admin.users.model import Personnel

DAY = "15/03/2567"


class InMemoryReports:
    def __init__(self, *reports):
        self.rows = {r.record_id: r for r in reports}
        self.saved = []
        self.deleted = []

    def list_all(self):
        return list(self.rows.values())

    def save(self, report, *, is_new):
        self.saved.append((report, is_new))
        self.rows[report.record_id] = report
        return report

    def delete(self, ids):
        self.deleted.extend(ids)


class InMemoryStudents:
    def __init__(self, *students):
        self.students = list(students)

    def list_all(self):
        return list(self.students)


class FakeSchoolData:
    def __init__(self, settings):
        self.settings = settings

    def load_all(self):
        return {"settings": self.settings}

    def save_settings(self, settings):
        return settings


ADMIN = Personnel(personnel_id=1, title="นาย", name="ผู้ดูแล", position="ผอ.", id_card="1", role=Role.ADMIN)
TEACHER = Personnel(personnel_id=2, title="นาง", name="สมใจ", position="ครูเวรหอ", id_card="2")


def _student(student_id, dormitory):
    return Student(student_id=student_id, title="เด็กชาย", name=f"นักเรียน{student_id}", dormitory=dormitory)


def _report(record_id, dormitory, **kw):
    base = dict(record_id=record_id, report_date=DAY, dormitory=dormitory, present_count=0, sick_count=0)
    base.update(kw)
    return DormitoryReport(**base)


def _svc(reports=None, students=(), dormitories=("ภูพาน", "ลำปาว", "เรือนพยาบาล")):
    return DormitoryReportService(
        reports or InMemoryReports(),
        InMemoryStudents(*students),
        SettingsService(FakeSchoolData({"dormitories": list(dormitories)})),
    )


def test_student_details_are_kept_as_json_text():
    report = DormitoryReport.from_remote(
        {"id": 1, "reportDate": DAY, "dormitory": "ภูพาน", "studentDetails": [{"name": "มะลิ", "status": "sick"}]}
    )

    assert report.student_details == '[{"name": "มะลิ", "status": "sick"}]'
    assert report.to_ui()["studentDetails"] == [{"name": "มะลิ", "status": "sick"}]
    assert "homeCount" not in report.to_remote()


def test_new_report_fills_reporter_and_time():
    repo = InMemoryReports()
    now = datetime(2024, 3, 15, 19, 30)

    saved = _svc(repo).save(current=TEACHER, report=_report(0, "ภูพาน", present_count=20), is_new=True, now=now)

    assert saved.reporter_name == "นางสมใจ"
    assert saved.position == "ครูเวรหอ"
    assert saved.report_time == "19:30"
    assert saved.record_id == int(now.timestamp() * 1000)
    assert repo.saved == [(saved, True)]


@pytest.mark.parametrize(
    "report",
    [
        _report(0, ""),
        _report(0, "ภูพาน", report_date="yesterday"),
        _report(0, "ภูพาน", sick_count=-1),
    ],
)
def test_invalid_reports_are_rejected(report):
    with pytest.raises(ValidationError):
        _svc().save(current=TEACHER, report=report, is_new=True)


def test_update_requires_existing_report():
    repo = InMemoryReports(_report(5, "ภูพาน"))
    svc = _svc(repo)

    svc.save(current=TEACHER, report=_report(5, "ภูพาน", present_count=3), is_new=False)
    assert repo.saved[-1][1] is False

    with pytest.raises(ValidationError):
        svc.save(current=TEACHER, report=_report(6, "ภูพาน"), is_new=False)


def test_delete_is_admin_only():
    repo = InMemoryReports()
    with pytest.raises(AuthorizationError):
        _svc(repo).delete(current=TEACHER, ids=[1])

    _svc(repo).delete(current=ADMIN, ids=["3"])
    assert repo.deleted == [3]


def test_newest_report_per_dormitory_wins():
    latest = latest_per_dormitory([_report(1, "ภูพาน"), _report(3, "ภูพาน"), _report(2, "ภูพาน")])
    assert latest["ภูพาน"].record_id == 3


def test_daily_summary_derives_missing_home_counts():
    repo = InMemoryReports(
        _report(1, "ภูพาน", present_count=1, sick_count=0),
        _report(2, "ภูพาน", present_count=3, sick_count=1),
        _report(3, "ลำปาว", present_count=2, sick_count=0, home_count=4),
        _report(4, "เรือนพยาบาล", present_count=9, sick_count=2),
        _report(5, "ภูพาน", report_date="14/03/2567", present_count=50),
    )
    students = [_student(i, "ภูพาน") for i in range(6)]

    summary = _svc(repo, students).daily_summary(date=DAY)

    assert [s.to_ui() for s in summary.dormitories] == [
        {"name": "ภูพาน", "present": 3, "sick": 1, "home": 2, "total": 6},
        {"name": "ลำปาว", "present": 2, "sick": 0, "home": 4, "total": 6},
    ]
    assert (summary.present, summary.sick, summary.home) == (5, 3, 6)


def test_summary_lists_unreported_and_unknown_dormitories():
    repo = InMemoryReports(_report(1, "หอใหม่", present_count=7, home_count=0))

    summary = _svc(repo, dormitories=("ภูพาน",)).daily_summary(date="2024-03-15")

    assert [(s.name, s.total) for s in summary.dormitories] == [("ภูพาน", 0), ("หอใหม่", 7)]


def test_list_reports_filters_by_day_and_dormitory():
    repo = InMemoryReports(_report(1, "ภูพาน"), _report(2, "ลำปาว"), _report(3, "ภูพาน", report_date="14/03/2567"))
    svc = _svc(repo)

    assert [r.record_id for r in svc.list_reports(date=DAY)] == [2, 1]
    assert [r.record_id for r in svc.list_reports(dormitory="ภูพาน")] == [3, 1]
    with pytest.raises(ValidationError):
        svc.list_reports(date="someday")
