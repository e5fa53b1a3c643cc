from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import to_enum, to_float, to_int
from ..core.enums import AttendanceStatus, DressCode, DutyStatus, DutyType, TimePeriod
from ..files.model import EncodingPlan

DUTY_FILES = EncodingPlan(data_uri_fields=("image",))


def attendance_id(date: str, period: TimePeriod, person_id: int) -> str:
    """Composite key ``<date>_<period>_<personId>``; one record per person and slot."""
    return f"{date}_{TimePeriod(period).value}_{int(person_id)}"


@dataclass(frozen=True)
class StudentAttendance:
    record_id: str
    date: str
    period: TimePeriod
    student_id: int
    status: AttendanceStatus
    note: str = ""

    @classmethod
    def create(cls, *, date: str, period: TimePeriod, student_id: int, status: AttendanceStatus, note: str = ""):
        return cls(attendance_id(date, period, student_id), date, TimePeriod(period), int(student_id), status, note)

    def differs_from(self, other: "StudentAttendance") -> bool:
        return self.status != other.status

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "StudentAttendance":
        return cls(
            record_id=str(row.get("id") or ""),
            date=str(row.get("date") or ""),
            period=to_enum(row.get("period"), TimePeriod, TimePeriod.MORNING),
            student_id=to_int(row.get("studentId")),
            status=to_enum(row.get("status"), AttendanceStatus, AttendanceStatus.PRESENT),
            note=str(row.get("note") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.record_id,
            "date": self.date,
            "period": self.period.value,
            "studentId": self.student_id,
            "status": self.status.value,
            "note": self.note,
        }


@dataclass(frozen=True)
class PersonnelAttendance:
    record_id: str
    date: str
    period: TimePeriod
    personnel_id: int
    status: AttendanceStatus
    dress_code: Optional[DressCode] = DressCode.TIDY
    note: str = ""

    @classmethod
    def create(
        cls,
        *,
        date: str,
        period: TimePeriod,
        personnel_id: int,
        status: AttendanceStatus,
        dress_code: Optional[DressCode] = DressCode.TIDY,
        note: str = "",
    ):
        return cls(
            attendance_id(date, period, personnel_id), date, TimePeriod(period), int(personnel_id), status, dress_code, note
        )

    def differs_from(self, other: "PersonnelAttendance") -> bool:
        return self.status != other.status or self.dress_code != other.dress_code

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "PersonnelAttendance":
        return cls(
            record_id=str(row.get("id") or ""),
            date=str(row.get("date") or ""),
            period=to_enum(row.get("period"), TimePeriod, TimePeriod.MORNING),
            personnel_id=to_int(row.get("personnelId")),
            status=to_enum(row.get("status"), AttendanceStatus, AttendanceStatus.PRESENT),
            dress_code=to_enum(row.get("dressCode"), DressCode, None),
            note=str(row.get("note") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.record_id,
            "date": self.date,
            "period": self.period.value,
            "personnelId": self.personnel_id,
            "status": self.status.value,
            "dressCode": self.dress_code.value if self.dress_code else "",
            "note": self.note,
        }


@dataclass(frozen=True)
class DutyRecord:
    """บันทึกการลงเวลาปฏิบัติหน้าที่ พร้อมพิกัด GPS"""

    record_id: int
    date: str
    time: str
    personnel_id: int
    personnel_name: str
    duty_type: DutyType
    latitude: float
    longitude: float
    distance: int
    status: DutyStatus
    image: str = ""

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "DutyRecord":
        return cls(
            record_id=to_int(row.get("id")),
            date=str(row.get("date") or ""),
            time=str(row.get("time") or ""),
            personnel_id=to_int(row.get("personnelId")),
            personnel_name=str(row.get("personnelName") or ""),
            duty_type=to_enum(row.get("type"), DutyType, DutyType.CHECK_IN),
            latitude=to_float(row.get("latitude")),
            longitude=to_float(row.get("longitude")),
            distance=to_int(row.get("distance")),
            status=to_enum(row.get("status"), DutyStatus, DutyStatus.WITHIN_RANGE),
            image=str(row.get("image") or ""),
        )

    def to_remote(self) -> dict:
        return {
            "id": self.record_id,
            "date": self.date,
            "time": self.time,
            "personnelId": self.personnel_id,
            "personnelName": self.personnel_name,
            "type": self.duty_type.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "distance": self.distance,
            "image": self.image,
            "status": self.status.value,
        }
