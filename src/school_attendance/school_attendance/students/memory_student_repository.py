from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Sequence

from .model import Student
from .repository import StudentRepository


class InMemoryStudentRepository(StudentRepository):
    def __init__(self):
        self._students: dict[str, Student] = {}

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._students.get(student_id)

    def list_all(self) -> Sequence[Student]:
        return list(self._students.values())

    def list_by_class(self, class_id: str) -> Sequence[Student]:
        return [s for s in self._students.values() if s.class_id == class_id]

    def count_by_class(self) -> dict[str, int]:
        return dict(Counter(s.class_id for s in self._students.values()))

    def add_many(self, students: Iterable[Student]) -> int:
        added = 0
        for s in students:
            self._students[s.student_id] = s
            added += 1
        return added

    def update(self, student: Student) -> bool:
        if student.student_id not in self._students:
            return False
        self._students[student.student_id] = student
        return True

    def delete_many(self, student_ids: Iterable[str]) -> int:
        removed = 0
        for student_id in set(student_ids):
            if self._students.pop(student_id, None) is not None:
                removed += 1
        return removed
