from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, student_id, att_date, session_id, status, marked_by"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["record_id"],
        student_id=r["student_id"],
        date=r["att_date"],
        session_id=int(r["session_id"]),
        status=AttendanceStatus(r["status"]),
        marked_by=r["marked_by"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, student_id: str, att_date: date, session_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE student_id=%s AND att_date=%s AND session_id=%s
                """,
                (student_id, att_date, int(session_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), marked_by=VALUES(marked_by)
                """,
                (
                    record.record_id,
                    record.student_id,
                    record.date,
                    int(record.session_id),
                    record.status.value,
                    record.marked_by,
                ),
            )

            # On update the original record_id survives; read it back.
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE student_id=%s AND att_date=%s AND session_id=%s
                """,
                (record.student_id, record.date, int(record.session_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else record

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY att_date, session_id")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_session(self, *, student_ids: Iterable[str], att_date: date, session_id: int) -> Sequence[AttendanceRecord]:
        clause, params = in_clause(student_ids)
        if not params:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE att_date=%s AND session_id=%s AND student_id IN {clause}
                """,
                (att_date, int(session_id)) + params,
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_students(self, student_ids: Iterable[str]) -> int:
        clause, params = in_clause(student_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM attendance_records WHERE student_id IN {clause}", params)
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def delete_for_students(self, student_ids: Iterable[str]) -> int:
        clause, params = in_clause(student_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM attendance_records WHERE student_id IN {clause}", params)
            return int(cur.rowcount)
