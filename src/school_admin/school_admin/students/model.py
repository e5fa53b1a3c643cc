from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..common.dates import age_on
from ..common.normalize import first_image_source, normalize_array
from ..common.validators import to_int
from ..files.model import EncodingPlan

IMAGE_FIELDS = ("studentProfileImage", "studentIdCardImage", "studentDisabilityCardImage", "guardianIdCardImage")
STUDENT_FILES = EncodingPlan(array_fields=IMAGE_FIELDS)

_CORE_KEYS = {
    "id",
    "studentTitle",
    "studentName",
    "studentNickname",
    "studentClass",
    "dormitory",
    "studentIdCard",
    "studentDob",
    "studentAddress",
    "studentPhone",
    "homeroomTeachers",
    *IMAGE_FIELDS,
}


@dataclass(frozen=True)
class Student:
    """นักเรียน. Parent/guardian columns travel untouched in ``details``."""

    student_id: int
    title: str
    name: str
    nickname: str = ""
    student_class: str = ""
    dormitory: str = ""
    id_card: str = ""
    dob: str = ""
    address: str = ""
    phone: str = ""
    homeroom_teachers: tuple[int, ...] = ()
    images: dict[str, tuple[Any, ...]] = field(default_factory=dict)
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.title}{self.name}"

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "Student":
        return cls(
            student_id=to_int(row.get("id")),
            title=str(row.get("studentTitle") or ""),
            name=str(row.get("studentName") or ""),
            nickname=str(row.get("studentNickname") or ""),
            student_class=str(row.get("studentClass") or ""),
            dormitory=str(row.get("dormitory") or ""),
            id_card=str(row.get("studentIdCard") or ""),
            dob=str(row.get("studentDob") or ""),
            address=str(row.get("studentAddress") or ""),
            phone=str(row.get("studentPhone") or ""),
            homeroom_teachers=tuple(to_int(t) for t in normalize_array(row.get("homeroomTeachers"))),
            images={name: tuple(normalize_array(row.get(name))) for name in IMAGE_FIELDS},
            details={k: v for k, v in row.items() if k not in _CORE_KEYS},
        )

    def to_remote(self) -> dict:
        out = dict(self.details)
        out.update(
            {
                "id": self.student_id,
                "studentTitle": self.title,
                "studentName": self.name,
                "studentNickname": self.nickname,
                "studentClass": self.student_class,
                "dormitory": self.dormitory,
                "studentIdCard": self.id_card,
                "studentDob": self.dob,
                "studentAddress": self.address,
                "studentPhone": self.phone,
                "homeroomTeachers": list(self.homeroom_teachers),
            }
        )
        for name in IMAGE_FIELDS:
            out[name] = list(self.images.get(name, ()))
        return out

    def to_ui(self) -> dict:
        return {
            "id": self.student_id,
            "full_name": self.full_name,
            "nickname": self.nickname,
            "class": self.student_class,
            "dormitory": self.dormitory,
            "age": age_on(self.dob),
            "profile_image_url": first_image_source(self.images.get("studentProfileImage")),
        }
