from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.validators import require_ids, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import Personnel
from .model import Student
from .repository import StudentRepository


class StudentService:
    def __init__(self, students: StudentRepository):
        self._students = students

    def list_all(self, *, dormitory: Optional[str] = None, student_class: Optional[str] = None) -> Sequence[Student]:
        rows = self._students.list_all()
        if dormitory:
            rows = [s for s in rows if s.dormitory == dormitory]
        if student_class:
            rows = [s for s in rows if s.student_class == student_class]
        return sorted(rows, key=lambda s: (s.student_class, s.name))

    def get(self, student_id: int) -> Student:
        for s in self._students.list_all():
            if s.student_id == int(student_id):
                return s
        raise ValidationError("ไม่พบข้อมูลนักเรียน")

    def save(self, *, student: Student, is_new: bool) -> Student:
        require_non_empty(student.name, "ชื่อ-สกุลนักเรียน")
        require_non_empty(student.student_class, "ชั้นเรียน")
        return self._students.save(student, is_new=is_new)

    def delete(self, *, current: Personnel, ids: Iterable[int]) -> None:
        if current.role != Role.ADMIN:
            raise AuthorizationError("คุณไม่มีสิทธิ์ลบข้อมูลนักเรียน")
        ids = require_ids(ids)
        self._students.delete(ids)
