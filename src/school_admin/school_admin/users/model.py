from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.normalize import first_image_source, normalize_array
from ..common.validators import to_int
from ..core.enums import PersonnelStatus, Role
from ..files.model import EncodingPlan

OTHER_TITLE = "อื่นๆ"

PERSONNEL_FILES = EncodingPlan(array_fields=("profileImage",))


def _role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        return Role.USER


def _status(value: Any) -> PersonnelStatus:
    # Rows written before the approval flow existed have no status at all.
    try:
        return PersonnelStatus(value or PersonnelStatus.APPROVED.value)
    except ValueError:
        return PersonnelStatus.APPROVED


@dataclass(frozen=True)
class Personnel:
    """บุคลากร: teacher or staff account."""

    personnel_id: int
    title: str
    name: str
    position: str
    id_card: str
    phone: str = ""
    email: str = ""
    title_other: str = ""
    dob: str = ""
    appointment_date: str = ""
    position_number: str = ""
    profile_image: tuple[Any, ...] = ()
    advisory_classes: tuple[str, ...] = ()
    special_rank: str = ""
    role: Role = Role.USER
    status: PersonnelStatus = PersonnelStatus.APPROVED
    password: Optional[str] = field(default=None, repr=False)
    token: Optional[str] = field(default=None, repr=False)

    @property
    def full_name(self) -> str:
        title = self.title_other if self.title == OTHER_TITLE else self.title
        return f"{title or ''}{self.name}"

    @classmethod
    def from_remote(cls, row: Mapping[str, Any]) -> "Personnel":
        return cls(
            personnel_id=to_int(row.get("id")),
            title=str(row.get("personnelTitle") or ""),
            title_other=str(row.get("personnelTitleOther") or ""),
            name=str(row.get("personnelName") or ""),
            position=str(row.get("position") or ""),
            id_card=str(row.get("idCard") or ""),
            phone=str(row.get("phone") or ""),
            email=str(row.get("email") or ""),
            dob=str(row.get("dob") or ""),
            appointment_date=str(row.get("appointmentDate") or ""),
            position_number=str(row.get("positionNumber") or ""),
            profile_image=tuple(normalize_array(row.get("profileImage"))),
            advisory_classes=tuple(str(c) for c in normalize_array(row.get("advisoryClasses"))),
            special_rank=str(row.get("specialRank") or ""),
            role=_role(row.get("role")),
            status=_status(row.get("status")),
            password=str(row["password"]) if row.get("password") not in (None, "") else None,
            token=str(row["token"]) if row.get("token") not in (None, "") else None,
        )

    def to_remote(self) -> dict:
        out = {
            "id": self.personnel_id,
            "personnelTitle": self.title,
            "personnelTitleOther": self.title_other,
            "personnelName": self.name,
            "position": self.position,
            "idCard": self.id_card,
            "phone": self.phone,
            "email": self.email,
            "dob": self.dob,
            "appointmentDate": self.appointment_date,
            "positionNumber": self.position_number,
            "profileImage": list(self.profile_image),
            "advisoryClasses": list(self.advisory_classes),
            "specialRank": self.special_rank,
            "role": self.role.value,
            "status": self.status.value,
        }
        if self.password is not None:
            out["password"] = self.password
        return out

    def to_session(self) -> dict:
        """Small subset kept in the session cookie; enough for auth injection."""
        out = {
            "id": self.personnel_id,
            "idCard": self.id_card,
            "personnelTitle": self.title,
            "personnelTitleOther": self.title_other,
            "personnelName": self.name,
            "position": self.position,
            "specialRank": self.special_rank,
            "role": self.role.value,
            "status": self.status.value,
        }
        if self.token is not None:
            out["token"] = self.token
        elif self.password is not None:
            out["password"] = self.password
        return out

    def to_ui(self) -> dict:
        return {
            "id": self.personnel_id,
            "full_name": self.full_name,
            "position": self.position,
            "phone": self.phone,
            "role": self.role.value,
            "status": self.status.value,
            "profile_image_url": first_image_source(self.profile_image),
        }
