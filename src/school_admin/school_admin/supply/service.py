from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.dates import today_display
from ..common.ids import new_record_id
from ..common.validators import require_ids, require_non_empty
from ..core.constants import BUYING_TYPES, HIRING_TYPES, UNSPECIFIED
from ..core.enums import ProcurementStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import Personnel
from .model import ProcurementRecord
from .repository import ProcurementRepository


class ProcurementService:
    """Use case: purchase/hire requests and their approval."""

    def __init__(self, records: ProcurementRepository):
        self._records = records

    def list_records(self) -> list[ProcurementRecord]:
        return sorted(self._records.list_all(), key=lambda r: r.record_id, reverse=True)

    def get(self, record_id: int) -> ProcurementRecord:
        for r in self._records.list_all():
            if r.record_id == int(record_id):
                return r
        raise ValidationError("ไม่พบรายการขอซื้อ/ขอจ้าง")

    def save(self, *, current: Personnel, record: ProcurementRecord, is_new: bool) -> ProcurementRecord:
        require_non_empty(record.subject, "เรื่อง")
        items = tuple(i for i in record.items if i.description.strip())
        if not items:
            raise ValidationError("กรุณาเพิ่มรายการพัสดุอย่างน้อย 1 รายการ")
        if any(i.quantity <= 0 or i.unit_price < 0 for i in items):
            raise ValidationError("จำนวนและราคาต่อหน่วยไม่ถูกต้อง")

        if is_new:
            record = replace(
                record,
                record_id=record.record_id or new_record_id(),
                requester_name=record.requester_name or current.full_name,
                status=ProcurementStatus.PENDING,
                approver_name="",
                approved_date="",
            )
        else:
            existing = self.get(record.record_id)
            if existing.status != ProcurementStatus.PENDING:
                raise ValidationError("ไม่สามารถแก้ไขรายการที่พิจารณาแล้ว")
            # Approval fields only change through decide().
            record = replace(
                record,
                status=existing.status,
                approver_name=existing.approver_name,
                approved_date=existing.approved_date,
            )
        return self._records.save(replace(record, items=items))

    def decide(
        self,
        *,
        current: Personnel,
        record_id: int,
        status: ProcurementStatus,
        today: Optional[date] = None,
    ) -> ProcurementRecord:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์อนุมัติรายการ")
        if status == ProcurementStatus.PENDING:
            raise ValidationError("สถานะไม่ถูกต้อง")
        record = self.get(record_id)
        if record.status != ProcurementStatus.PENDING:
            raise ValidationError("รายการนี้ได้รับการพิจารณาแล้ว")
        decided = replace(
            record,
            status=status,
            approver_name=current.full_name,
            approved_date=today_display(today),
        )
        return self._records.save(decided)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์ลบรายการ")
        ids = require_ids(ids)
        self._records.delete(ids)

    def stats(self) -> dict:
        return procurement_stats(self._records.list_all())


def procurement_stats(records: Sequence[ProcurementRecord]) -> dict:
    budgets: dict[str, float] = defaultdict(float)
    for r in records:
        budgets[r.procurement_type or UNSPECIFIED] += r.total_price
    statuses = Counter(r.status.value for r in records)
    return {
        "total": len(records),
        "buyingCount": sum(1 for r in records if r.procurement_type in BUYING_TYPES),
        "hiringCount": sum(1 for r in records if r.procurement_type in HIRING_TYPES),
        "totalApprovedBudget": sum(r.approved_budget for r in records),
        "byStatus": {s.value: statuses.get(s.value, 0) for s in ProcurementStatus},
        "budgetByType": sorted(budgets.items(), key=lambda kv: kv[1], reverse=True),
    }
