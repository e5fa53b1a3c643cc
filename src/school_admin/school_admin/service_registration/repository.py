from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import ServiceRecord


class ServiceRecordRepository(Protocol):
    def list_all(self) -> Sequence[ServiceRecord]:
        raise NotImplementedError

    def save(self, record: ServiceRecord) -> ServiceRecord:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
