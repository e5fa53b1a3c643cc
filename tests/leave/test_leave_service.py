from __future__ import annotations

from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import LeaveSession, LeaveStatus, Role
from src.school_admin.school_admin.core.exceptions import AuthorizationError, ValidationError
from src.school_admin.school_admin.dashboard.service import SettingsService
from src.school_admin.school_admin.leave.model import LeaveRecord
from src.school_admin.school_admin.leave.service import LeaveService, leave_days
from src.school_admin.school_admin.users.model import Personnel

TODAY = date(2024, 3, 15)


class InMemoryLeave:
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


class FakeSchoolData:
    def __init__(self, settings=None):
        self.settings = dict(settings or {})
        self.saved_settings = []

    def load_all(self):
        return {"settings": self.settings}

    def save_settings(self, settings):
        self.saved_settings.append(dict(settings))
        self.settings = dict(settings)
        return dict(settings)


ADMIN = Personnel(personnel_id=1, title="นาย", name="ผู้ดูแล", position="ผอ.", id_card="1", role=Role.ADMIN)
TEACHER = Personnel(personnel_id=2, title="นาง", name="สมใจ", position="ครู", id_card="2")
OTHER = Personnel(personnel_id=3, title="นาย", name="สมชาย", position="ครู", id_card="3")
DEPUTY = Personnel(
    personnel_id=4, title="นาง", name="รองฯ", position="รองผู้อำนวยการ", id_card="4", special_rank="deputy"
)


def _leave(record_id=0, **kw):
    base = dict(
        record_id=record_id,
        personnel_id=TEACHER.personnel_id,
        personnel_name="นางสมใจ",
        leave_type="ลาป่วย",
        start_date="11/03/2567",
        end_date="13/03/2567",
    )
    base.update(kw)
    return LeaveRecord(**base)


def _svc(*records, settings=None):
    repo = InMemoryLeave(*records)
    data = FakeSchoolData(settings)
    return LeaveService(repo, SettingsService(data)), repo, data


def test_leave_days_counts_both_ends():
    assert leave_days("11/03/2567", "13/03/2567", LeaveSession.FULL) == 3
    assert leave_days("11/03/2567", "11/03/2567", LeaveSession.FULL) == 1
    assert leave_days("11/03/2567", "11/03/2567", LeaveSession.MORNING) == 0.5


@pytest.mark.parametrize("start, end", [("13/03/2567", "11/03/2567"), ("", "11/03/2567")])
def test_leave_days_rejects_bad_ranges(start, end):
    with pytest.raises(ValidationError):
        leave_days(start, end, LeaveSession.FULL)


def test_new_request_belongs_to_the_submitter_and_is_pending():
    svc, repo, _ = _svc()
    forged = _leave(personnel_id=OTHER.personnel_id, status=LeaveStatus.APPROVED, approver_name="ใครก็ได้")

    saved = svc.save(current=TEACHER, record=forged, is_new=True, today=TODAY)

    assert saved.personnel_id == TEACHER.personnel_id
    assert saved.personnel_name == "นางสมใจ"
    assert saved.status == LeaveStatus.PENDING
    assert saved.approver_name == ""
    assert saved.days_count == 3
    assert saved.submission_date == "15/03/2567"
    assert saved.record_id in repo.rows


def test_blank_type_defaults_to_first_configured_type():
    svc, _, _ = _svc(settings={"leaveTypes": ["ลากิจส่วนตัว", "ลาป่วย"]})

    saved = svc.save(current=TEACHER, record=_leave(leave_type=""), is_new=True)

    assert saved.leave_type == "ลากิจส่วนตัว"
    with pytest.raises(ValidationError):
        svc.save(current=TEACHER, record=_leave(leave_type="ลาเที่ยว"), is_new=True)


def test_only_owner_edits_and_only_while_pending():
    pending = _leave(10)
    approved = _leave(11, status=LeaveStatus.APPROVED)
    svc, _, _ = _svc(pending, approved)

    edited = svc.save(current=TEACHER, record=_leave(10, end_date="11/03/2567", reason="ไข้"), is_new=False)
    assert (edited.days_count, edited.reason) == (1, "ไข้")

    with pytest.raises(AuthorizationError):
        svc.save(current=OTHER, record=_leave(10), is_new=False)
    with pytest.raises(ValidationError):
        svc.save(current=TEACHER, record=_leave(11), is_new=False)


def test_approvers_are_admins_ranks_and_listed_ids():
    svc, _, _ = _svc(settings={"leaveApproverIds": ["3"]})

    assert svc.is_approver(ADMIN)
    assert svc.is_approver(DEPUTY)
    assert svc.is_approver(OTHER)
    assert not svc.is_approver(TEACHER)


def test_decide_records_approver():
    svc, repo, _ = _svc(_leave(10))

    decided = svc.decide(current=DEPUTY, record_id=10, status=LeaveStatus.APPROVED, comment=" ok ", today=TODAY)

    assert decided.status == LeaveStatus.APPROVED
    assert decided.approver_name == "นางรองฯ"
    assert decided.approved_date == "15/03/2567"
    assert decided.comment == "ok"
    assert repo.rows[10] == decided
    with pytest.raises(ValidationError):
        svc.decide(current=DEPUTY, record_id=10, status=LeaveStatus.REJECTED)


def test_non_approver_cannot_decide():
    svc, _, _ = _svc(_leave(10))
    with pytest.raises(AuthorizationError):
        svc.decide(current=OTHER, record_id=10, status=LeaveStatus.APPROVED)
    with pytest.raises(AuthorizationError):
        svc.pending_approvals(current=TEACHER)


def test_delete_rules():
    svc, repo, _ = _svc(_leave(10), _leave(11, status=LeaveStatus.APPROVED), _leave(12, personnel_id=3))

    svc.delete(current=TEACHER, ids=[10])
    assert repo.deleted == [10]
    for ids in ([11], [12]):
        with pytest.raises(AuthorizationError):
            svc.delete(current=TEACHER, ids=ids)

    svc.delete(current=ADMIN, ids=[11, 12])
    assert repo.deleted == [10, 11, 12]


def test_listing_and_stats_are_scoped_to_own_records_for_staff():
    records = (
        _leave(10, days_count=3, status=LeaveStatus.APPROVED),
        _leave(11, leave_type="ลากิจส่วนตัว", days_count=1, status=LeaveStatus.APPROVED),
        _leave(12, personnel_id=3, personnel_name="นายสมชาย", days_count=2, status=LeaveStatus.APPROVED),
        _leave(13, days_count=5),
    )
    svc, _, _ = _svc(*records)

    assert [r.record_id for r in svc.list_records(current=TEACHER)] == [13, 11, 10]
    assert [r.record_id for r in svc.list_records(current=ADMIN, name="สมชาย")] == [12]
    assert [r.record_id for r in svc.list_records(current=ADMIN, status=LeaveStatus.PENDING)] == [13]

    stats = svc.stats(current=TEACHER)
    assert stats["total"] == 3
    assert stats["approved"] == 2
    assert stats["daysByType"] == [{"name": "ลาป่วย", "value": 3}, {"name": "ลากิจส่วนตัว", "value": 1}]
    assert svc.stats(current=ADMIN)["total"] == 4


def test_admin_manages_leave_types_through_settings():
    svc, _, data = _svc()

    types = svc.add_leave_type(current=ADMIN, name="ลาพิเศษ")

    assert types[-1] == "ลาพิเศษ"
    assert data.saved_settings[-1]["leaveTypes"] == types
    assert "ลาพิเศษ" not in svc.remove_leave_type(current=ADMIN, name="ลาพิเศษ")
    with pytest.raises(ValidationError):
        svc.add_leave_type(current=ADMIN, name="ลาป่วย")
    with pytest.raises(AuthorizationError):
        svc.add_leave_type(current=TEACHER, name="ลาอื่นๆ")
