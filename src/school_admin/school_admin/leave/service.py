from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.dates import parse_display, today_display
from ..common.ids import new_record_id
from ..common.normalize import normalize_array
from ..common.validators import require_ids, require_non_empty, to_int
from ..core.constants import LEAVE_APPROVER_RANKS, LEAVE_TYPES
from ..core.enums import LeaveSession, LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..dashboard.service import SettingsService
from ..users.model import Personnel
from .model import LeaveRecord
from .repository import LeaveRepository


def leave_days(start_date: str, end_date: str, session: LeaveSession) -> float:
    """Calendar days from start to end inclusive; a half-day session counts 0.5."""
    start, end = parse_display(start_date), parse_display(end_date)
    if start is None or end is None:
        raise ValidationError("วันที่ลาไม่ถูกต้อง")
    span = (end.to_date() - start.to_date()).days
    if span < 0:
        raise ValidationError("วันที่สิ้นสุดต้องไม่อยู่ก่อนวันที่เริ่มลา")
    if session != LeaveSession.FULL:
        return 0.5
    return float(span + 1)


def leave_stats(records: Sequence[LeaveRecord]) -> dict:
    days_by_type: dict[str, float] = defaultdict(float)
    for r in records:
        if r.status == LeaveStatus.APPROVED:
            days_by_type[r.leave_type] += r.days_count
    statuses = Counter(r.status.value for r in records)
    return {
        "total": len(records),
        "approved": statuses.get(LeaveStatus.APPROVED.value, 0),
        "byStatus": {s.value: statuses.get(s.value, 0) for s in LeaveStatus},
        "daysByType": [{"name": name, "value": days} for name, days in days_by_type.items()],
    }


class LeaveService:
    """Use case: personnel leave requests and their approval."""

    def __init__(self, records: LeaveRepository, settings: SettingsService):
        self._records = records
        self._settings = settings

    def leave_types(self) -> list[str]:
        return [str(t) for t in normalize_array(self._settings.get().get("leaveTypes")) if t]

    def is_approver(self, current: Personnel) -> bool:
        if current.role == Role.ADMIN or current.special_rank in LEAVE_APPROVER_RANKS:
            return True
        approver_ids = normalize_array(self._settings.get().get("leaveApproverIds"))
        return current.personnel_id in {to_int(i) for i in approver_ids}

    def _visible(self, current: Personnel) -> list[LeaveRecord]:
        rows = list(self._records.list_all())
        if self.is_approver(current):
            return rows
        return [r for r in rows if r.personnel_id == current.personnel_id]

    def list_records(
        self,
        *,
        current: Personnel,
        name: str = "",
        leave_type: str = "",
        status: Optional[LeaveStatus] = None,
    ) -> list[LeaveRecord]:
        needle = (name or "").strip().lower()
        rows = [
            r
            for r in self._visible(current)
            if (not needle or needle in r.personnel_name.lower())
            and (not leave_type or r.leave_type == leave_type)
            and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: r.record_id, reverse=True)

    def pending_approvals(self, *, current: Personnel) -> list[LeaveRecord]:
        if not self.is_approver(current):
            raise AuthorizationError("คุณไม่มีสิทธิ์พิจารณาใบลา")
        rows = [r for r in self._records.list_all() if r.status == LeaveStatus.PENDING]
        return sorted(rows, key=lambda r: r.record_id, reverse=True)

    def get(self, record_id: int) -> LeaveRecord:
        for r in self._records.list_all():
            if r.record_id == int(record_id):
                return r
        raise ValidationError("ไม่พบใบลา")

    def save(
        self,
        *,
        current: Personnel,
        record: LeaveRecord,
        is_new: bool,
        today: Optional[date] = None,
    ) -> LeaveRecord:
        types = self.leave_types()
        leave_type = record.leave_type or (types[0] if types else LEAVE_TYPES[0])
        if types and leave_type not in types:
            raise ValidationError("ประเภทการลาไม่ถูกต้อง")
        days = leave_days(record.start_date, record.end_date, record.session)

        if is_new:
            record = replace(
                record,
                record_id=record.record_id or new_record_id(),
                personnel_id=current.personnel_id,
                personnel_name=current.full_name,
                position=current.position,
                status=LeaveStatus.PENDING,
                submission_date=today_display(today),
                comment="",
                approver_name="",
                approved_date="",
            )
        else:
            existing = self.get(record.record_id)
            if existing.personnel_id != current.personnel_id:
                raise AuthorizationError("คุณไม่มีสิทธิ์แก้ไขใบลานี้")
            if existing.status != LeaveStatus.PENDING:
                raise ValidationError("ไม่สามารถแก้ไขใบลาที่พิจารณาแล้ว")
            # Owner and approval fields only change through decide().
            record = replace(
                record,
                personnel_id=existing.personnel_id,
                personnel_name=existing.personnel_name,
                position=existing.position,
                status=existing.status,
                submission_date=existing.submission_date,
                comment=existing.comment,
                approver_name=existing.approver_name,
                approved_date=existing.approved_date,
            )
        return self._records.save(replace(record, leave_type=leave_type, days_count=days))

    def decide(
        self,
        *,
        current: Personnel,
        record_id: int,
        status: LeaveStatus,
        comment: str = "",
        today: Optional[date] = None,
    ) -> LeaveRecord:
        if not self.is_approver(current):
            raise AuthorizationError("คุณไม่มีสิทธิ์พิจารณาใบลา")
        if status == LeaveStatus.PENDING:
            raise ValidationError("สถานะไม่ถูกต้อง")
        record = self.get(record_id)
        if record.status != LeaveStatus.PENDING:
            raise ValidationError("ใบลานี้ได้รับการพิจารณาแล้ว")
        decided = replace(
            record,
            status=status,
            comment=(comment or "").strip(),
            approver_name=current.full_name,
            approved_date=today_display(today),
        )
        return self._records.save(decided)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        ids = require_ids(ids)
        if current.role != Role.ADMIN:
            deletable = {
                r.record_id
                for r in self._records.list_all()
                if r.personnel_id == current.personnel_id and r.status == LeaveStatus.PENDING
            }
            if not set(ids) <= deletable:
                raise AuthorizationError("คุณไม่มีสิทธิ์ลบใบลานี้")
        self._records.delete(ids)

    def stats(self, *, current: Personnel) -> dict:
        return leave_stats(self._visible(current))

    def add_leave_type(self, *, current: Personnel, name: str) -> list[str]:
        name = require_non_empty(name, "ประเภทการลา")
        types = self.leave_types()
        if name in types:
            raise ValidationError("มีประเภทการลานี้อยู่แล้ว")
        return self._save_types(current, types + [name])

    def remove_leave_type(self, *, current: Personnel, name: str) -> list[str]:
        types = self.leave_types()
        if name not in types:
            raise ValidationError("ไม่พบประเภทการลา")
        return self._save_types(current, [t for t in types if t != name])

    def _save_types(self, current: Personnel, types: list[str]) -> list[str]:
        saved = self._settings.update(current=current, changes={"leaveTypes": types})
        return [str(t) for t in normalize_array(saved.get("leaveTypes")) if t]
