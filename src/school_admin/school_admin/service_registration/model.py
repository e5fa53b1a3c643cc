from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.normalize import first_image_source, normalize_array
from ..common.validators import normalize_time, to_int
from ..files.model import EncodingPlan

SERVICE_FILES = EncodingPlan(array_fields=("images",))


@dataclass(frozen=True)
class ServiceStudent:
    student_id: int
    name: str
    student_class: str
    nickname: str = ""

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "ServiceStudent":
        return cls(
            student_id=to_int(row.get("id")),
            name=str(row.get("name") or ""),
            student_class=str(row.get("class") or ""),
            nickname=str(row.get("nickname") or ""),
        )

    def to_remote(self) -> dict:
        return {"id": self.student_id, "name": self.name, "class": self.student_class, "nickname": self.nickname}


@dataclass(frozen=True)
class ServiceRecord:
    """การใช้บริการแหล่งเรียนรู้ของนักเรียนหนึ่งกลุ่ม"""

    record_id: int
    date: str
    time: str
    location: str
    purpose: str
    teacher_id: int
    teacher_name: str
    students: tuple[ServiceStudent, ...] = ()
    images: tuple[Any, ...] = ()
    legacy_student_count: int = 0

    @property
    def student_count(self) -> int:
        return len(self.students) or self.legacy_student_count

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "ServiceRecord":
        students = tuple(ServiceStudent.from_remote(s) for s in normalize_array(row.get("students")) if isinstance(s, dict))
        raw_time = str(row.get("time") or "")
        return cls(
            record_id=to_int(row.get("id")),
            date=str(row.get("date") or ""),
            time=normalize_time(raw_time) or raw_time,
            location=str(row.get("location") or ""),
            purpose=str(row.get("purpose") or ""),
            teacher_id=to_int(row.get("teacherId")),
            teacher_name=str(row.get("teacherName") or ""),
            students=students,
            images=tuple(normalize_array(row.get("images"))),
            # Rows written before group registration carry a single studentId.
            legacy_student_count=1 if to_int(row.get("studentId")) else 0,
        )

    def to_remote(self) -> dict:
        first = self.students[0] if self.students else None
        return {
            "id": self.record_id,
            "date": self.date,
            "time": self.time,
            "students": [s.to_remote() for s in self.students],
            "studentId": first.student_id if first else 0,
            "studentName": first.name if first else "",
            "studentClass": first.student_class if first else "",
            "location": self.location,
            "purpose": self.purpose,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "images": list(self.images),
        }

    def to_ui(self) -> dict:
        out = self.to_remote()
        out["images"] = [i for i in self.images if isinstance(i, str)]
        out["coverImageUrl"] = first_image_source(out["images"])
        out["studentCount"] = self.student_count
        return out
