from __future__ import annotations

from typing import Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import DUTY_FILES, DutyRecord, PersonnelAttendance, StudentAttendance
from .repository import AttendanceRepository, DutyRepository


class RemoteAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_students(self) -> Sequence[StudentAttendance]:
        return [StudentAttendance.from_remote(r) for r in self._store.fetch_sheet("studentAttendance")]

    def list_personnel(self) -> Sequence[PersonnelAttendance]:
        return [PersonnelAttendance.from_remote(r) for r in self._store.fetch_sheet("personnelAttendance")]

    def save_students(self, records: Sequence[StudentAttendance]) -> Sequence[StudentAttendance]:
        saved = self._store.save_batch("saveStudentAttendance", [r.to_remote() for r in records])
        return [StudentAttendance.from_remote(r) for r in saved]

    def save_personnel(self, records: Sequence[PersonnelAttendance]) -> Sequence[PersonnelAttendance]:
        saved = self._store.save_batch("savePersonnelAttendance", [r.to_remote() for r in records])
        return [PersonnelAttendance.from_remote(r) for r in saved]


class RemoteDutyRepository(DutyRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[DutyRecord]:
        return [DutyRecord.from_remote(r) for r in self._store.fetch_sheet("dutyRecords")]

    def save(self, record: DutyRecord) -> DutyRecord:
        saved = self._store.save("saveDutyRecord", record.to_remote(), DUTY_FILES)
        return DutyRecord.from_remote(saved) if saved else record
