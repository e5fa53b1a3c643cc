from __future__ import annotations

from datetime import datetime

import pytest

from src.school_admin.school_admin.core.enums import Role
from src.school_admin.school_admin.core.exceptions import AuthorizationError, ValidationError
from src.school_admin.school_admin.service_registration.model import ServiceRecord, ServiceStudent
from src.school_admin.school_admin.service_registration.service import ServiceRegistrationService, monthly_stats
from src.school_admin.school_admin.users.model import Personnel


class InMemoryServiceRecords:
    def __init__(self, *records):
        self.rows = {r.record_id: r for r in records}
        self.deleted = []

    def list_all(self):
        return list(self.rows.values())

    def save(self, record):
        self.rows[record.record_id] = record
        return record

    def delete(self, ids):
        self.deleted.extend(ids)


ADMIN = Personnel(personnel_id=1, title="นาย", name="ผู้ดูแล", position="ผอ.", id_card="1", role=Role.ADMIN)
OWNER = Personnel(personnel_id=2, title="นาง", name="สมใจ", position="ครู", id_card="2")
OTHER = Personnel(personnel_id=3, title="นาย", name="มานะ", position="ครู", id_card="3")

KIDS = (ServiceStudent(10, "ด.ช.หนึ่ง", "ป.1"), ServiceStudent(11, "ด.ญ.สอง", "ป.1"))


def _record(record_id, date, location="ห้องสมุด", students=KIDS, time="09:00", teacher_id=2, **kw):
    return ServiceRecord(
        record_id=record_id,
        date=date,
        time=time,
        location=location,
        purpose=kw.pop("purpose", "อ่านหนังสือ"),
        teacher_id=teacher_id,
        teacher_name="นางสมใจ",
        students=tuple(students),
        **kw,
    )


def test_legacy_row_counts_one_student():
    rec = ServiceRecord.from_remote({"id": 1, "date": "01/02/2567", "studentId": "55", "time": "8:5"})
    assert rec.student_count == 1
    assert rec.time == "08:05"


def test_to_remote_keeps_first_student_columns():
    remote = _record(1, "01/02/2567").to_remote()
    assert remote["studentId"] == 10
    assert remote["studentName"] == "ด.ช.หนึ่ง"
    assert len(remote["students"]) == 2


def test_monthly_stats_for_buddhist_month():
    records = [
        _record(1, "01/02/2567"),
        _record(2, "29/02/2567", location="สวนพฤกษศาสตร์", students=KIDS[:1]),
        _record(3, "2024-02-29", location="", students=KIDS[:1]),
        _record(4, "01/03/2567"),
    ]

    stats = monthly_stats(records, month=2, year=2567)

    assert stats.total_requests == 3
    assert stats.total_students == 4
    assert len(stats.daily_students) == 29
    assert stats.daily_students[0] == 2
    assert stats.daily_students[28] == 2
    assert stats.popular_location == "ห้องสมุด"
    assert dict(stats.by_location) == {"ห้องสมุด": 1, "สวนพฤกษศาสตร์": 1, "ไม่ระบุ": 1}


def test_monthly_stats_location_filter_and_empty():
    records = [_record(1, "01/02/2567"), _record(2, "02/02/2567", location="ลานกีฬา")]
    stats = monthly_stats(records, month=2, year=2567, location="ลานกีฬา")
    assert stats.total_requests == 1
    assert stats.popular_location == "ลานกีฬา"

    empty = monthly_stats(records, month=5, year=2567)
    assert empty.total_requests == 0
    assert empty.popular_location == "-"


def test_service_validates_month_and_year():
    svc = ServiceRegistrationService(InMemoryServiceRecords())
    with pytest.raises(ValidationError):
        svc.monthly_stats(month=13, year=2567)
    with pytest.raises(ValidationError):
        svc.monthly_stats(month=1, year=500)


def test_list_newest_first_and_search():
    repo = InMemoryServiceRecords(
        _record(1, "01/02/2567", time="10:00"),
        _record(2, "01/02/2567", time="13:00", purpose="ทดลองวิทยาศาสตร์"),
        _record(3, "15/01/2567"),
    )
    svc = ServiceRegistrationService(repo)

    assert [r.record_id for r in svc.list_records()] == [2, 1, 3]
    assert [r.record_id for r in svc.list_records(search="ทดลอง")] == [2]


def test_save_new_record_defaults_date_and_time():
    repo = InMemoryServiceRecords()
    now = datetime(2024, 2, 1, 9, 30)

    rec = ServiceRegistrationService(repo).save(
        current=OWNER, location="ห้องสมุด", purpose="อ่านหนังสือ", students=KIDS, now=now
    )

    assert rec.date == "01/02/2567"
    assert rec.time == "09:30"
    assert rec.teacher_name == "นางสมใจ"
    assert rec.record_id == int(now.timestamp() * 1000)


def test_save_requires_students():
    with pytest.raises(ValidationError):
        ServiceRegistrationService(InMemoryServiceRecords()).save(
            current=OWNER, location="ห้องสมุด", purpose="อ่าน", students=()
        )


def test_only_owner_or_admin_edits():
    repo = InMemoryServiceRecords(_record(1, "01/02/2567"))
    svc = ServiceRegistrationService(repo)

    with pytest.raises(AuthorizationError):
        svc.save(current=OTHER, location="x", purpose="y", students=KIDS, record_id=1)

    edited = svc.save(current=ADMIN, location="ลานกีฬา", purpose="พละ", students=KIDS, record_id=1)
    assert edited.teacher_id == 2
    assert edited.location == "ลานกีฬา"


def test_delete_own_records_only():
    repo = InMemoryServiceRecords(_record(1, "01/02/2567"), _record(2, "01/02/2567", teacher_id=3))
    svc = ServiceRegistrationService(repo)

    with pytest.raises(AuthorizationError):
        svc.delete(current=OWNER, ids=[1, 2])
    svc.delete(current=OWNER, ids=[1])
    svc.delete(current=ADMIN, ids=[2])
    assert repo.deleted == [1, 2]
