from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_class(self, class_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def count_by_class(self) -> dict[str, int]:
        raise NotImplementedError

    def add_many(self, students: Iterable[Student]) -> int:
        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete_many(self, student_ids: Iterable[str]) -> int:
        raise NotImplementedError
