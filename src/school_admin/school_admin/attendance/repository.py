from __future__ import annotations

from typing import Protocol, Sequence

from .model import DutyRecord, PersonnelAttendance, StudentAttendance


class AttendanceRepository(Protocol):
    def list_students(self) -> Sequence[StudentAttendance]:
        raise NotImplementedError

    def list_personnel(self) -> Sequence[PersonnelAttendance]:
        raise NotImplementedError

    def save_students(self, records: Sequence[StudentAttendance]) -> Sequence[StudentAttendance]:
        raise NotImplementedError

    def save_personnel(self, records: Sequence[PersonnelAttendance]) -> Sequence[PersonnelAttendance]:
        raise NotImplementedError


class DutyRepository(Protocol):
    def list_all(self) -> Sequence[DutyRecord]:
        raise NotImplementedError

    def save(self, record: DutyRecord) -> DutyRecord:
        raise NotImplementedError
