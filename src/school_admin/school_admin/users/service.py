from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.ids import new_record_id
from ..common.normalize import digits_only
from ..common.validators import require_ids, require_min_length, require_non_empty
from ..core.enums import PersonnelStatus, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    RemoteBusinessError,
    StaleDeploymentError,
    ValidationError,
)
from ..files.model import LocalFile
from ..sync.credentials import SessionUserStore
from .model import Personnel
from .repository import PersonnelRepository

ID_CARD_DIGITS = 13


def require_id_card(value: str) -> str:
    digits = digits_only(value)
    if len(digits) != ID_CARD_DIGITS:
        raise ValidationError("เลขบัตรประชาชนต้องมี 13 หลัก")
    return digits


def require_email(value: str) -> str:
    email = require_non_empty(value, "อีเมล")
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("รูปแบบอีเมลไม่ถูกต้อง")
    return email


class AuthService:
    """Use case: login / logout against the remote personnel sheet."""

    def __init__(self, personnel: PersonnelRepository, users: SessionUserStore, *, admin_id_card: str = ""):
        self._personnel = personnel
        self._users = users
        self._admin_id_card = digits_only(admin_id_card)

    def apply_admin_override(self, person: Personnel) -> Personnel:
        if self._admin_id_card and digits_only(person.id_card) == self._admin_id_card:
            return replace(person, role=Role.ADMIN)
        return person

    def login(self, id_card: str, password: str, *, remember: bool = False) -> Personnel:
        id_card = require_non_empty(id_card, "เลขบัตรประชาชน")
        password = require_non_empty(password, "รหัสผ่าน")

        try:
            person = self._personnel.authenticate(id_card=id_card, password=password)
        except StaleDeploymentError:
            raise
        except RemoteBusinessError as e:
            raise AuthenticationError(str(e)) from e

        if person is None:
            raise AuthenticationError("เลขบัตรประชาชนหรือรหัสผ่านไม่ถูกต้อง")
        if person.status == PersonnelStatus.PENDING:
            raise AuthenticationError("บัญชีของคุณอยู่ระหว่างรอการอนุมัติจากผู้ดูแลระบบ")
        if person.status == PersonnelStatus.BLOCKED:
            raise AuthenticationError("บัญชีของคุณถูกระงับการใช้งาน")

        person = self.apply_admin_override(person)
        if person.token is None and person.password is None:
            person = replace(person, password=password)

        self._users.save(person.to_session(), remember=remember)
        return person

    def logout(self) -> None:
        self._users.clear()

    def current_user(self) -> Optional[Personnel]:
        row = self._users.load()
        return Personnel.from_remote(row) if row else None

    def require_user(self) -> Personnel:
        user = self.current_user()
        if user is None:
            raise AuthenticationError("กรุณาเข้าสู่ระบบก่อนใช้งาน")
        return user


class RegistrationService:
    """Use case: self-registration with e-mail OTP, approved later by an admin."""

    def __init__(self, personnel: PersonnelRepository):
        self._personnel = personnel

    def request_otp(self, *, id_card: str, email: str) -> None:
        self._personnel.check_duplicate_and_send_otp(id_card=require_id_card(id_card), email=require_email(email))

    def verify_code(self, *, email: str, code: str) -> None:
        code = require_non_empty(code, "รหัสยืนยัน")
        if not self._personnel.verify_email_code(email=require_email(email), code=code):
            raise ValidationError("รหัสยืนยันไม่ถูกต้องหรือหมดอายุ")

    def register(
        self,
        *,
        title: str,
        name: str,
        position: str,
        id_card: str,
        email: str,
        phone: str,
        password: str,
        title_other: str = "",
        dob: str = "",
        profile_image: Sequence[LocalFile] = (),
    ) -> Personnel:
        require_min_length(password, "รหัสผ่าน", 4)
        person = Personnel(
            personnel_id=new_record_id(),
            title=require_non_empty(title, "คำนำหน้า"),
            title_other=(title_other or "").strip(),
            name=require_non_empty(name, "ชื่อ-สกุล"),
            position=require_non_empty(position, "ตำแหน่ง"),
            id_card=require_id_card(id_card),
            email=require_email(email),
            phone=(phone or "").strip(),
            dob=(dob or "").strip(),
            profile_image=tuple(profile_image),
            role=Role.USER,
            status=PersonnelStatus.PENDING,
            password=password,
        )
        return self._personnel.save(person, is_new=True)


class PersonnelService:
    """Use case: manage personnel records (admin, or a user editing their own profile)."""

    def __init__(self, personnel: PersonnelRepository):
        self._personnel = personnel

    def list_all(self) -> Sequence[Personnel]:
        return self._personnel.list_all()

    def get(self, personnel_id: int) -> Personnel:
        for p in self._personnel.list_all():
            if p.personnel_id == int(personnel_id):
                return p
        raise ValidationError("ไม่พบข้อมูลบุคลากร")

    def save(self, *, current: Personnel, person: Personnel, is_new: bool) -> Personnel:
        if current.role != Role.ADMIN:
            if is_new or person.personnel_id != current.personnel_id:
                raise AuthorizationError("คุณไม่มีสิทธิ์แก้ไขข้อมูลบุคลากรคนอื่น")
            # Users may not promote or approve themselves.
            person = replace(person, role=current.role, status=current.status)

        require_non_empty(person.name, "ชื่อ-สกุล")
        require_id_card(person.id_card)
        return self._personnel.save(person, is_new=is_new)

    def set_status(self, *, current: Personnel, personnel_id: int, status: PersonnelStatus) -> Personnel:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์")
        person = self.get(personnel_id)
        if person.personnel_id == current.personnel_id and status == PersonnelStatus.BLOCKED:
            raise ValidationError("ไม่สามารถระงับบัญชีของตนเองได้")
        return self._personnel.save(replace(person, status=status), is_new=False)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์")
        ids = require_ids(ids)
        if current.personnel_id in ids:
            raise ValidationError("ไม่สามารถลบบัญชีของตนเองได้")
        self._personnel.delete(ids)
