from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import ProcurementRecord


class ProcurementRepository(Protocol):
    def list_all(self) -> Sequence[ProcurementRecord]:
        raise NotImplementedError

    def save(self, record: ProcurementRecord) -> ProcurementRecord:
        raise NotImplementedError

    def delete(self, ids: Iterable[int]) -> None:
        raise NotImplementedError
