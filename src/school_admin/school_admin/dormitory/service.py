from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.dates import parse_display, thai_date_parts, today_display
from ..common.ids import new_record_id
from ..common.normalize import normalize_array
from ..common.validators import require_ids, require_non_empty
from ..core.constants import INFIRMARY_DORMITORY
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..dashboard.service import SettingsService
from ..students.repository import StudentRepository
from ..users.model import Personnel
from .model import DormitoryReport, DormitoryStat
from .repository import DormitoryReportRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DormitorySummary:
    date: str
    dormitories: list[DormitoryStat]
    present: int
    sick: int
    home: int

    def to_ui(self) -> dict:
        return {
            "date": self.date,
            "dormitories": [d.to_ui() for d in self.dormitories],
            "totalPresent": self.present,
            "totalSick": self.sick,
            "totalHome": self.home,
        }


def _day(value: str) -> tuple[int, int, int]:
    day = thai_date_parts(value)
    if day == (0, 0, 0):
        raise ValidationError("วันที่ไม่ถูกต้อง")
    return day


def latest_per_dormitory(reports: Sequence[DormitoryReport]) -> dict[str, DormitoryReport]:
    """Several reports for one dormitory on one day: the newest id wins."""
    latest: dict[str, DormitoryReport] = {}
    for r in reports:
        current = latest.get(r.dormitory)
        if current is None or r.record_id > current.record_id:
            latest[r.dormitory] = r
    return latest


def home_count(report: DormitoryReport, residents: int) -> int:
    if report.home_count is not None:
        return report.home_count
    return max(0, residents - report.present_count - report.sick_count)


def summarize_day(
    reports: Sequence[DormitoryReport],
    *,
    date: str,
    dormitories: Sequence[str],
    residents: Counter,
) -> DormitorySummary:
    day = _day(date)
    latest = latest_per_dormitory([r for r in reports if thai_date_parts(r.report_date) == day])

    names = [d for d in dormitories if d != INFIRMARY_DORMITORY]
    names += sorted(d for d in latest if d not in names and d != INFIRMARY_DORMITORY)

    stats = []
    for name in names:
        report = latest.get(name)
        if report is None:
            stats.append(DormitoryStat(name=name))
            continue
        stats.append(
            DormitoryStat(
                name=name,
                present=report.present_count,
                sick=report.sick_count,
                home=home_count(report, residents[name]),
            )
        )

    present = sick = home = 0
    for r in latest.values():
        sick += r.sick_count
        if r.dormitory == INFIRMARY_DORMITORY:
            continue
        present += r.present_count
        home += home_count(r, residents[r.dormitory])

    return DormitorySummary(date=date, dormitories=stats, present=present, sick=sick, home=home)


class DormitoryReportService:
    """Use case: daily head counts per dormitory and the day's summary."""

    def __init__(
        self,
        reports: DormitoryReportRepository,
        students: StudentRepository,
        settings: SettingsService,
    ):
        self._reports = reports
        self._students = students
        self._settings = settings

    def list_reports(self, *, date: Optional[str] = None, dormitory: Optional[str] = None) -> list[DormitoryReport]:
        rows = list(self._reports.list_all())
        if date:
            day = _day(date)
            rows = [r for r in rows if thai_date_parts(r.report_date) == day]
        if dormitory:
            rows = [r for r in rows if r.dormitory == dormitory]
        return sorted(rows, key=lambda r: r.record_id, reverse=True)

    def get(self, record_id: int) -> DormitoryReport:
        for r in self._reports.list_all():
            if r.record_id == int(record_id):
                return r
        raise ValidationError("ไม่พบรายงานเรือนนอน")

    def save(
        self,
        *,
        current: Personnel,
        report: DormitoryReport,
        is_new: bool,
        now: Optional[datetime] = None,
    ) -> DormitoryReport:
        require_non_empty(report.dormitory, "เรือนนอน")
        if parse_display(report.report_date) is None:
            raise ValidationError("วันที่รายงานไม่ถูกต้อง")
        counts = (report.present_count, report.sick_count, report.home_count or 0)
        if any(n < 0 for n in counts):
            raise ValidationError("จำนวนนักเรียนต้องไม่ติดลบ")

        if is_new:
            now = now or datetime.now()
            report = replace(
                report,
                record_id=report.record_id or new_record_id(now.timestamp()),
                reporter_name=report.reporter_name or current.full_name,
                position=report.position or current.position,
                report_time=report.report_time or now.strftime("%H:%M"),
            )
        else:
            self.get(report.record_id)

        logger.info("Saving dormitory report %s for %s", report.record_id, report.dormitory)
        return self._reports.save(report, is_new=is_new)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์ลบรายงาน")
        self._reports.delete(require_ids(ids))

    def daily_summary(self, *, date: Optional[str] = None) -> DormitorySummary:
        date = date or today_display()
        dormitories = [str(d) for d in normalize_array(self._settings.get().get("dormitories")) if d]
        residents = Counter(s.dormitory for s in self._students.list_all())
        return summarize_day(self._reports.list_all(), date=date, dormitories=dormitories, residents=residents)
