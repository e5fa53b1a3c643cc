from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Personnel


class PersonnelRepository(Protocol):
    def authenticate(self, *, id_card: str, password: str) -> Optional[Personnel]:
        raise NotImplementedError

    def check_duplicate_and_send_otp(self, *, id_card: str, email: str) -> None:
        raise NotImplementedError

    def verify_email_code(self, *, email: str, code: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Personnel]:
        raise NotImplementedError

    def save(self, personnel: Personnel, *, is_new: bool) -> Personnel:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
