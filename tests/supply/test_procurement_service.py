from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import ProcurementStatus, Role
from src.school_admin.school_admin.core.exceptions import AuthorizationError, ValidationError
from src.school_admin.school_admin.supply.model import ProcurementItem, ProcurementRecord
from src.school_admin.school_admin.supply.service import ProcurementService, procurement_stats
from src.school_admin.school_admin.users.model import Personnel


class InMemoryProcurements:
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
STAFF = Personnel(personnel_id=2, title="นาง", name="พัสดุ", position="เจ้าหน้าที่", id_card="2")

PAPER = ProcurementItem(item_id=1, item_type="วัสดุ", description="กระดาษ A4", quantity=10, unit="รีม", unit_price=120)
INK = ProcurementItem(item_id=2, item_type="วัสดุ", description="หมึกพิมพ์", quantity=2, unit="กล่อง", unit_price=450.5)


def _record(record_id=0, **kw):
    base = dict(
        record_id=record_id,
        doc_number="ศธ 001/2567",
        doc_date="01/05/2567",
        subject="ขอซื้อวัสดุสำนักงาน",
        reason="ใช้ในงานธุรการ",
        requester_name="",
        procurement_type="วัสดุ",
        items=(PAPER, INK),
    )
    base.update(kw)
    return ProcurementRecord(**base)


def test_total_price_from_items():
    assert _record().total_price == pytest.approx(2101)
    assert _record().to_remote()["totalPrice"] == pytest.approx(2101)


def test_new_record_is_forced_pending():
    repo = InMemoryProcurements()
    saved = ProcurementService(repo).save(
        current=STAFF,
        record=_record(status=ProcurementStatus.APPROVED, approver_name="ใครก็ได้"),
        is_new=True,
    )
    assert saved.status == ProcurementStatus.PENDING
    assert saved.approver_name == ""
    assert saved.requester_name == "นางพัสดุ"
    assert saved.record_id > 0


def test_save_drops_blank_items_and_requires_one():
    svc = ProcurementService(InMemoryProcurements())
    blank = replace(PAPER, description="  ")
    with pytest.raises(ValidationError):
        svc.save(current=STAFF, record=_record(items=(blank,)), is_new=True)

    saved = svc.save(current=STAFF, record=_record(items=(blank, INK)), is_new=True)
    assert saved.items == (INK,)


def test_bad_quantity_rejected():
    with pytest.raises(ValidationError):
        ProcurementService(InMemoryProcurements()).save(
            current=STAFF, record=_record(items=(replace(PAPER, quantity=0),)), is_new=True
        )


def test_decided_record_cannot_be_edited():
    repo = InMemoryProcurements(_record(5, status=ProcurementStatus.APPROVED))
    with pytest.raises(ValidationError):
        ProcurementService(repo).save(current=STAFF, record=_record(5), is_new=False)


def test_edit_keeps_approval_fields():
    repo = InMemoryProcurements(_record(5))
    saved = ProcurementService(repo).save(
        current=STAFF, record=_record(5, subject="แก้ไข", status=ProcurementStatus.APPROVED), is_new=False
    )
    assert saved.subject == "แก้ไข"
    assert saved.status == ProcurementStatus.PENDING


def test_decide_rules():
    repo = InMemoryProcurements(_record(5))
    svc = ProcurementService(repo)

    with pytest.raises(AuthorizationError):
        svc.decide(current=STAFF, record_id=5, status=ProcurementStatus.APPROVED)
    with pytest.raises(ValidationError):
        svc.decide(current=ADMIN, record_id=5, status=ProcurementStatus.PENDING)

    decided = svc.decide(current=ADMIN, record_id=5, status=ProcurementStatus.REJECTED, today=date(2024, 5, 3))
    assert decided.status == ProcurementStatus.REJECTED
    assert decided.approver_name == "นายผู้ดูแล"
    assert decided.approved_date == "03/05/2567"

    with pytest.raises(ValidationError):
        svc.decide(current=ADMIN, record_id=5, status=ProcurementStatus.APPROVED)


def test_only_admin_deletes():
    repo = InMemoryProcurements(_record(5))
    svc = ProcurementService(repo)
    with pytest.raises(AuthorizationError):
        svc.delete(current=STAFF, ids=[5])
    svc.delete(current=ADMIN, ids=[5])
    assert repo.deleted == [5]


def test_stats():
    records = [
        _record(1, approved_budget=2000, status=ProcurementStatus.APPROVED),
        _record(2, procurement_type="จ้างเหมาบริการ", items=(replace(PAPER, quantity=1),)),
        _record(3, procurement_type="", items=(replace(PAPER, quantity=2),)),
    ]
    stats = procurement_stats(records)

    assert stats["total"] == 3
    assert stats["buyingCount"] == 1
    assert stats["hiringCount"] == 1
    assert stats["totalApprovedBudget"] == 2000
    assert stats["byStatus"] == {"pending": 2, "approved": 1, "rejected": 0}
    assert stats["budgetByType"][0] == ("วัสดุ", pytest.approx(2101))
    assert dict(stats["budgetByType"])["ไม่ระบุ"] == pytest.approx(240)
