from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.normalize import normalize_array
from ..common.validators import to_enum, to_float, to_int
from ..core.enums import ProcurementStatus


@dataclass(frozen=True)
class ProcurementItem:
    item_id: int
    item_type: str
    description: str
    quantity: float
    unit: str
    unit_price: float
    location: str = ""

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "ProcurementItem":
        return cls(
            item_id=to_int(row.get("id")),
            item_type=str(row.get("type") or ""),
            description=str(row.get("description") or ""),
            quantity=to_float(row.get("quantity")),
            unit=str(row.get("unit") or ""),
            unit_price=to_float(row.get("unitPrice")),
            location=str(row.get("location") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.item_id,
            "type": self.item_type,
            "description": self.description,
            "quantity": self.quantity,
            "unit": self.unit,
            "unitPrice": self.unit_price,
            "location": self.location,
        }


@dataclass(frozen=True)
class ProcurementRecord:
    """รายงานขอซื้อ/ขอจ้างพัสดุ"""

    record_id: int
    doc_number: str
    doc_date: str
    subject: str
    reason: str
    requester_name: str
    department: str = ""
    project: str = ""
    supplier_name: str = ""
    manager_name: str = ""
    procurement_type: str = ""
    procurement_method: str = ""
    needed_date: str = ""
    items: tuple[ProcurementItem, ...] = ()
    approved_budget: float = 0.0
    status: ProcurementStatus = ProcurementStatus.PENDING
    approver_name: str = ""
    approved_date: str = ""

    @property
    def total_price(self) -> float:
        return sum(i.amount for i in self.items)

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "ProcurementRecord":
        return cls(
            record_id=to_int(row.get("id")),
            doc_number=str(row.get("docNumber") or ""),
            doc_date=str(row.get("docDate") or ""),
            subject=str(row.get("subject") or ""),
            reason=str(row.get("reason") or ""),
            requester_name=str(row.get("requesterName") or ""),
            department=str(row.get("department") or ""),
            project=str(row.get("project") or ""),
            supplier_name=str(row.get("supplierName") or ""),
            manager_name=str(row.get("managerName") or ""),
            procurement_type=str(row.get("procurementType") or ""),
            procurement_method=str(row.get("procurementMethod") or ""),
            needed_date=str(row.get("neededDate") or ""),
            items=tuple(ProcurementItem.from_remote(i) for i in normalize_array(row.get("items")) if isinstance(i, dict)),
            approved_budget=to_float(row.get("approvedBudget")),
            status=to_enum(row.get("status"), ProcurementStatus, ProcurementStatus.PENDING),
            approver_name=str(row.get("approverName") or ""),
            approved_date=str(row.get("approvedDate") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.record_id,
            "docNumber": self.doc_number,
            "docDate": self.doc_date,
            "subject": self.subject,
            "reason": self.reason,
            "requesterName": self.requester_name,
            "department": self.department,
            "project": self.project,
            "supplierName": self.supplier_name,
            "managerName": self.manager_name,
            "procurementType": self.procurement_type,
            "procurementMethod": self.procurement_method,
            "neededDate": self.needed_date,
            "items": [i.to_remote() for i in self.items],
            "totalPrice": self.total_price,
            "approvedBudget": self.approved_budget,
            "status": self.status.value,
            "approverName": self.approver_name,
            "approvedDate": self.approved_date,
        }
