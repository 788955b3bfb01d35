from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from .model import AttendanceRecord
from .repository import AttendanceRepository

_Key = tuple[str, date, int]


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._by_key: dict[_Key, AttendanceRecord] = {}

    def get(self, *, student_id: str, att_date: date, session_id: int) -> Optional[AttendanceRecord]:
        return self._by_key.get((student_id, att_date, int(session_id)))

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.student_id, record.date, int(record.session_id))
        existing = self._by_key.get(key)
        if existing:
            record = replace(record, record_id=existing.record_id)
        self._by_key[key] = record
        return record

    def list_all(self) -> Sequence[AttendanceRecord]:
        return list(self._by_key.values())

    def list_for_session(self, *, student_ids: Iterable[str], att_date: date, session_id: int) -> Sequence[AttendanceRecord]:
        out = []
        for student_id in student_ids:
            rec = self._by_key.get((student_id, att_date, int(session_id)))
            if rec:
                out.append(rec)
        return out

    def count_for_students(self, student_ids: Iterable[str]) -> int:
        ids = set(student_ids)
        return sum(1 for r in self._by_key.values() if r.student_id in ids)

    def delete_for_students(self, student_ids: Iterable[str]) -> int:
        ids = set(student_ids)
        doomed = [k for k, r in self._by_key.items() if r.student_id in ids]
        for k in doomed:
            del self._by_key[k]
        return len(doomed)
