from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import ProcurementRecord
from .repository import ProcurementRepository


class RemoteProcurementRepository(ProcurementRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[ProcurementRecord]:
        return [ProcurementRecord.from_remote(r) for r in self._store.fetch_sheet("supplyRequests")]

    def save(self, record: ProcurementRecord) -> ProcurementRecord:
        saved = self._store.save("saveProcurementRecord", record.to_remote())
        return ProcurementRecord.from_remote(saved) if saved else record

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteProcurementRecords", ids)
