from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..sync.remote_base import RemoteRecordStore, as_record
from .model import PERSONNEL_FILES, Personnel
from .repository import PersonnelRepository


class RemotePersonnelRepository(PersonnelRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def authenticate(self, *, id_card: str, password: str) -> Optional[Personnel]:
        row = as_record(self._store.fetch("login", idCard=id_card, password=password))
        return Personnel.from_remote(row) if row else None

    def check_duplicate_and_send_otp(self, *, id_card: str, email: str) -> None:
        self._store.call("checkDuplicateAndSendOTP", idCard=id_card, email=email)

    def verify_email_code(self, *, email: str, code: str) -> bool:
        data = self._store.fetch("verifyEmailCode", email=email, code=code)
        if isinstance(data, dict):
            return bool(data.get("verified", True))
        return data is None or bool(data)

    def list_all(self) -> Sequence[Personnel]:
        return [Personnel.from_remote(r) for r in self._store.fetch_sheet("personnel")]

    def save(self, personnel: Personnel, *, is_new: bool) -> Personnel:
        action = "addPersonnel" if is_new else "updatePersonnel"
        saved = self._store.save(action, personnel.to_remote(), PERSONNEL_FILES)
        return Personnel.from_remote(saved) if saved else personnel

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deletePersonnel", ids)
