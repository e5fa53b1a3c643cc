from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import LeaveRecord
from .repository import LeaveRepository


class RemoteLeaveRepository(LeaveRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[LeaveRecord]:
        return [LeaveRecord.from_remote(r) for r in self._store.fetch_sheet("leaveRecords")]

    def save(self, record: LeaveRecord) -> LeaveRecord:
        saved = self._store.save("saveLeaveRecord", record.to_remote())
        return LeaveRecord.from_remote(saved) if saved else record

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteLeaveRecords", ids)
