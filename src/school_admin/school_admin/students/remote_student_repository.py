from __future__ import annotations

from typing import Iterable, Sequence

from ..sync.remote_base import RemoteRecordStore
from .model import STUDENT_FILES, Student
from .repository import StudentRepository


class RemoteStudentRepository(StudentRepository):
    def __init__(self, store: RemoteRecordStore):
        self._store = store

    def list_all(self) -> Sequence[Student]:
        return [Student.from_remote(r) for r in self._store.fetch_sheet("students")]

    def save(self, student: Student, *, is_new: bool) -> Student:
        action = "addStudent" if is_new else "updateStudent"
        saved = self._store.save(action, student.to_remote(), STUDENT_FILES)
        return Student.from_remote(saved) if saved else student

    def delete(self, ids: Iterable[int]) -> None:
        self._store.delete("deleteStudents", ids)
