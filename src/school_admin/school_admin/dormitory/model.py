from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.normalize import first_image_source, normalize_array
from ..common.validators import to_int
from ..files.model import EncodingPlan

REPORT_FILES = EncodingPlan(array_fields=("images",))


def _details_text(value: Any) -> str:
    """Per-student details travel as a JSON string, whatever shape was stored."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True)
class DormitoryReport:
    """รายงานยอดนักเรียนประจำเรือนนอน"""

    record_id: int
    report_date: str
    dormitory: str
    reporter_name: str = ""
    position: str = ""
    academic_year: str = ""
    report_time: str = ""
    present_count: int = 0
    sick_count: int = 0
    home_count: Optional[int] = None
    log: str = ""
    student_details: str = ""
    images: tuple[Any, ...] = ()

    @property
    def details(self) -> list[dict]:
        return [d for d in normalize_array(self.student_details) if isinstance(d, dict)]

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "DormitoryReport":
        home = row.get("homeCount")
        return cls(
            record_id=to_int(row.get("id")),
            report_date=str(row.get("reportDate") or ""),
            dormitory=str(row.get("dormitory") or ""),
            reporter_name=str(row.get("reporterName") or ""),
            position=str(row.get("position") or ""),
            academic_year=str(row.get("academicYear") or ""),
            report_time=str(row.get("reportTime") or ""),
            present_count=to_int(row.get("presentCount")),
            sick_count=to_int(row.get("sickCount")),
            # Older rows have no home column; the summary derives it instead.
            home_count=None if home in (None, "") else to_int(home),
            log=str(row.get("log") or ""),
            student_details=_details_text(row.get("studentDetails")),
            images=tuple(normalize_array(row.get("images"))),
        )

    def to_remote(self) -> dict:
        out = {
            "id": self.record_id,
            "reportDate": self.report_date,
            "reportTime": self.report_time,
            "reporterName": self.reporter_name,
            "position": self.position,
            "academicYear": self.academic_year,
            "dormitory": self.dormitory,
            "presentCount": self.present_count,
            "sickCount": self.sick_count,
            "log": self.log,
            "studentDetails": self.student_details,
            "images": list(self.images),
        }
        if self.home_count is not None:
            out["homeCount"] = self.home_count
        return out

    def to_ui(self) -> dict:
        out = self.to_remote()
        out["images"] = [i for i in self.images if isinstance(i, str)]
        out["coverImageUrl"] = first_image_source(out["images"])
        out["studentDetails"] = self.details
        return out


@dataclass(frozen=True)
class DormitoryStat:
    name: str
    present: int = 0
    sick: int = 0
    home: int = 0

    @property
    def total(self) -> int:
        return self.present + self.sick + self.home

    def to_ui(self) -> dict:
        return {"name": self.name, "present": self.present, "sick": self.sick, "home": self.home, "total": self.total}
