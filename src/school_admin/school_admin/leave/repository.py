from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import LeaveRecord


class LeaveRepository(Protocol):
    def list_all(self) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def save(self, record: LeaveRecord) -> LeaveRecord:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
