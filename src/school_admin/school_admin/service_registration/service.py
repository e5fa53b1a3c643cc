from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.dates import parse_display, thai_date_parts, today_display
from ..common.ids import new_record_id
from ..common.validators import normalize_time, require_ids, require_non_empty
from ..core.constants import BUDDHIST_ERA_OFFSET, TOP_LOCATIONS, UNSPECIFIED
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..files.model import LocalFile
from ..users.model import Personnel
from .model import ServiceRecord, ServiceStudent
from .repository import ServiceRecordRepository


@dataclass(frozen=True)
class MonthlyStats:
    month: int
    year: int
    total_requests: int
    total_students: int
    daily_students: list[int]
    by_location: list[tuple[str, int]]
    records: list[ServiceRecord]

    @property
    def popular_location(self) -> str:
        return self.by_location[0][0] if self.by_location else "-"

    @property
    def top_locations(self) -> list[tuple[str, int]]:
        return self.by_location[:TOP_LOCATIONS]


def _sort_key(r: ServiceRecord):
    cd = parse_display(r.date)
    return (cd.format_iso() if cd else "", r.time)


def monthly_stats(
    records: Sequence[ServiceRecord], *, month: int, year: int, location: str = ""
) -> MonthlyStats:
    """Statistics for one Buddhist-era month, optionally narrowed to a location."""
    selected = []
    for r in records:
        _, m, y = thai_date_parts(r.date)
        if m == month and y == year and (not location or r.location == location):
            selected.append(r)

    days = calendar.monthrange(year - BUDDHIST_ERA_OFFSET, month)[1]
    daily = [0] * days
    for r in selected:
        d, _, _ = thai_date_parts(r.date)
        if 1 <= d <= days:
            daily[d - 1] += r.student_count

    counts = Counter(r.location or UNSPECIFIED for r in selected)
    return MonthlyStats(
        month=month,
        year=year,
        total_requests=len(selected),
        total_students=sum(r.student_count for r in selected),
        daily_students=daily,
        by_location=sorted(counts.items(), key=lambda kv: kv[1], reverse=True),
        records=selected,
    )


class ServiceRegistrationService:
    def __init__(self, records: ServiceRecordRepository):
        self._records = records

    def list_records(self, *, search: str = "") -> list[ServiceRecord]:
        needle = (search or "").strip().lower()
        rows = [
            r
            for r in self._records.list_all()
            if not needle
            or needle in r.purpose.lower()
            or needle in r.teacher_name.lower()
            or needle in r.location.lower()
        ]
        return sorted(rows, key=_sort_key, reverse=True)

    def get(self, record_id: int) -> ServiceRecord:
        for r in self._records.list_all():
            if r.record_id == int(record_id):
                return r
        raise ValidationError("ไม่พบรายการ")

    def save(
        self,
        *,
        current: Personnel,
        location: str,
        purpose: str,
        students: Sequence[ServiceStudent],
        images: Sequence[LocalFile | str] = (),
        date: str = "",
        time: str = "",
        record_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ServiceRecord:
        now = now or datetime.now()
        if not students:
            raise ValidationError("กรุณาเลือกนักเรียนอย่างน้อย 1 คน")

        teacher_id, teacher_name = current.personnel_id, current.full_name
        if record_id:
            existing = self.get(record_id)
            if existing.teacher_id != current.personnel_id and current.role != Role.ADMIN:
                raise AuthorizationError("คุณไม่มีสิทธิ์แก้ไขรายการนี้")
            teacher_id, teacher_name = existing.teacher_id, existing.teacher_name

        record = ServiceRecord(
            record_id=record_id or new_record_id(now.timestamp()),
            date=date or today_display(now.date()),
            time=normalize_time(time) or now.strftime("%H:%M"),
            location=require_non_empty(location, "สถานที่"),
            purpose=require_non_empty(purpose, "วัตถุประสงค์"),
            teacher_id=teacher_id,
            teacher_name=teacher_name,
            students=tuple(students),
            images=tuple(images),
        )
        return self._records.save(record)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        ids = require_ids(ids)
        if current.role != Role.ADMIN:
            owned = {r.record_id for r in self._records.list_all() if r.teacher_id == current.personnel_id}
            if not set(ids) <= owned:
                raise AuthorizationError("คุณไม่มีสิทธิ์ลบรายการนี้")
        self._records.delete(ids)

    def monthly_stats(self, *, month: int, year: int, location: str = "") -> MonthlyStats:
        if not 1 <= month <= 12:
            raise ValidationError("เดือนไม่ถูกต้อง")
        if year <= BUDDHIST_ERA_OFFSET:
            raise ValidationError("ปีไม่ถูกต้อง")
        return monthly_stats(self._records.list_all(), month=month, year=year, location=location)
