from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence, TypeVar

from ..common.dates import CalendarDate
from ..common.ids import new_record_id
from ..common.validators import to_float, to_int
from ..core.constants import DEFAULT_CHECK_IN_RADIUS_M
from ..core.enums import AttendanceStatus, DressCode, DutyType, TimePeriod
from ..core.exceptions import ValidationError
from ..dashboard.repository import SchoolDataRepository
from ..users.model import OTHER_TITLE, Personnel
from .factory import DutyStrategyFactory
from .geo import haversine_distance
from .model import DutyRecord, PersonnelAttendance, StudentAttendance
from .repository import AttendanceRepository, DutyRepository

logger = logging.getLogger(__name__)

R = TypeVar("R", StudentAttendance, PersonnelAttendance)


def changed_records(current: Sequence[R], incoming: Sequence[R]) -> list[R]:
    """New ids, or existing ids whose tracked fields changed."""
    by_id = {r.record_id: r for r in current}
    out = []
    for r in incoming:
        old = by_id.get(r.record_id)
        if old is None or r.differs_from(old):
            out.append(r)
    return out


def merge_saved(current: Sequence[R], saved: Sequence[R]) -> list[R]:
    saved_ids = {r.record_id for r in saved}
    return [r for r in current if r.record_id not in saved_ids] + list(saved)


@dataclass(frozen=True)
class PeriodSummary:
    period: TimePeriod
    total: int
    by_status: dict[str, int]
    tidy: int = 0
    untidy: int = 0


class AttendanceService:
    """Use case: roll call for students and personnel, three periods a day."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_students(self, *, date: Optional[str] = None, period: Optional[TimePeriod] = None):
        return _filter(self._attendance.list_students(), date, period)

    def list_personnel(self, *, date: Optional[str] = None, period: Optional[TimePeriod] = None):
        return _filter(self._attendance.list_personnel(), date, period)

    def save_student_attendance(self, records: Sequence[StudentAttendance]) -> list[StudentAttendance]:
        current = list(self._attendance.list_students())
        changed = changed_records(current, records)
        if not changed:
            return current
        logger.info("Saving %d of %d student attendance records", len(changed), len(records))
        return merge_saved(current, self._attendance.save_students(changed))

    def save_personnel_attendance(self, records: Sequence[PersonnelAttendance]) -> list[PersonnelAttendance]:
        current = list(self._attendance.list_personnel())
        changed = changed_records(current, records)
        if not changed:
            return current
        logger.info("Saving %d of %d personnel attendance records", len(changed), len(records))
        return merge_saved(current, self._attendance.save_personnel(changed))

    def daily_summary(self, records: Sequence[StudentAttendance | PersonnelAttendance], *, date: str):
        out = []
        for period in TimePeriod:
            rows = [r for r in records if r.date == date and r.period == period]
            counts = Counter(r.status.value for r in rows)
            by_status = {s.value: counts.get(s.value, 0) for s in AttendanceStatus}
            present = [
                r
                for r in rows
                if isinstance(r, PersonnelAttendance) and r.status in (AttendanceStatus.PRESENT, AttendanceStatus.ACTIVITY)
            ]
            untidy = sum(1 for r in present if r.dress_code == DressCode.UNTIDY)
            out.append(
                PeriodSummary(
                    period=period,
                    total=len(rows),
                    by_status=by_status,
                    tidy=len(present) - untidy,
                    untidy=untidy,
                )
            )
        return out


def _filter(rows: Sequence[R], date: Optional[str], period: Optional[TimePeriod]) -> list[R]:
    return [r for r in rows if (not date or r.date == date) and (not period or r.period == period)]


class DutyService:
    """Use case: GPS duty check-in against the school location."""

    def __init__(
        self,
        duties: DutyRepository,
        *,
        school_lat: float,
        school_lng: float,
        radius_m: int = DEFAULT_CHECK_IN_RADIUS_M,
        strategy_factory: DutyStrategyFactory | None = None,
        settings: SchoolDataRepository | None = None,
    ):
        self._duties = duties
        self._settings = settings
        self._school = (float(school_lat), float(school_lng))
        self._radius = int(radius_m)
        self._factory = strategy_factory or DutyStrategyFactory()

    def list_records(self, *, name: str = "", personnel_id: Optional[int] = None) -> list[DutyRecord]:
        needle = (name or "").strip().lower()
        rows = [
            r
            for r in self._duties.list_all()
            if (not needle or needle in r.personnel_name.lower())
            and (personnel_id is None or r.personnel_id == personnel_id)
        ]
        return sorted(rows, key=lambda r: r.record_id, reverse=True)

    def check_in_site(self) -> tuple[tuple[float, float], int]:
        """School coordinates and radius; saved settings win over the configured defaults."""
        if self._settings is None:
            return self._school, self._radius
        loaded = self._settings.load_all()
        stored = loaded.get("settings") if isinstance(loaded, Mapping) else None
        if not isinstance(stored, Mapping):
            return self._school, self._radius
        lat = to_float(stored.get("schoolLat"), self._school[0])
        lng = to_float(stored.get("schoolLng"), self._school[1])
        radius = to_int(stored.get("checkInRadius"), self._radius)
        if radius <= 0:
            radius = self._radius
        return (lat, lng), radius

    def check_in(
        self,
        *,
        current: Personnel,
        duty_type: DutyType,
        latitude: float,
        longitude: float,
        image: str = "",
        confirmed: bool = False,
        now: datetime | None = None,
    ) -> DutyRecord:
        now = now or datetime.now()
        (school_lat, school_lng), radius = self.check_in_site()
        distance = haversine_distance(school_lat, school_lng, latitude, longitude)

        strategy = self._factory.for_distance(distance=distance, radius=radius)
        decision = strategy.decide(distance=distance, radius=radius)
        if decision.requires_confirmation and not confirmed:
            raise ValidationError(decision.note or "กรุณายืนยันการลงชื่อ")

        title = current.title_other if current.title == OTHER_TITLE else current.title
        record = DutyRecord(
            record_id=new_record_id(now.timestamp()),
            date=CalendarDate.from_date(now.date()).format_display(),
            time=now.strftime("%H:%M"),
            personnel_id=current.personnel_id,
            personnel_name=f"{title}{current.name}",
            duty_type=duty_type,
            latitude=float(latitude),
            longitude=float(longitude),
            distance=distance,
            status=decision.status,
            image=image or "",
        )
        return self._duties.save(record)
