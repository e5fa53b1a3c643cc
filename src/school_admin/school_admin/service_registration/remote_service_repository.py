from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import SERVICE_FILES, ServiceRecord
from .repository import ServiceRecordRepository


class RemoteServiceRecordRepository(ServiceRecordRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[ServiceRecord]:
        return [ServiceRecord.from_remote(r) for r in self._store.fetch_sheet("serviceRecords")]

    def save(self, record: ServiceRecord) -> ServiceRecord:
        saved = self._store.save("saveServiceRecord", record.to_remote(), SERVICE_FILES)
        return ServiceRecord.from_remote(saved) if saved else record

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteServiceRecords", ids)
