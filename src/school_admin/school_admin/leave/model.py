from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import to_enum, to_float, to_int
from ..core.enums import LeaveSession, LeaveStatus


@dataclass(frozen=True)
class LeaveRecord:
    """ใบลาของบุคลากร"""

    record_id: int
    personnel_id: int
    personnel_name: str
    leave_type: str
    start_date: str
    end_date: str
    position: str = ""
    session: LeaveSession = LeaveSession.FULL
    days_count: float = 0.0
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING
    submission_date: str = ""
    comment: str = ""
    approver_name: str = ""
    approved_date: str = ""

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "LeaveRecord":
        return cls(
            record_id=to_int(row.get("id")),
            personnel_id=to_int(row.get("personnelId")),
            personnel_name=str(row.get("personnelName") or ""),
            position=str(row.get("position") or ""),
            leave_type=str(row.get("type") or ""),
            start_date=str(row.get("startDate") or ""),
            end_date=str(row.get("endDate") or ""),
            session=to_enum(row.get("session"), LeaveSession, LeaveSession.FULL),
            days_count=to_float(row.get("daysCount")),
            reason=str(row.get("reason") or ""),
            status=to_enum(row.get("status"), LeaveStatus, LeaveStatus.PENDING),
            submission_date=str(row.get("submissionDate") or ""),
            comment=str(row.get("comment") or ""),
            approver_name=str(row.get("approverName") or ""),
            approved_date=str(row.get("approvedDate") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.record_id,
            "personnelId": self.personnel_id,
            "personnelName": self.personnel_name,
            "position": self.position,
            "type": self.leave_type,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "session": self.session.value,
            "daysCount": self.days_count,
            "reason": self.reason,
            "status": self.status.value,
            "submissionDate": self.submission_date,
            "comment": self.comment,
            "approverName": self.approver_name,
            "approvedDate": self.approved_date,
        }
