from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, *, student_id: str, att_date: date, session_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert, or replace the record already stored for (student_id, date, session_id).

        A replaced record keeps its original record_id. Returns the stored record.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, *, student_ids: Iterable[str], att_date: date, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_students(self, student_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def delete_for_students(self, student_ids: Iterable[str]) -> int:
        raise NotImplementedError
