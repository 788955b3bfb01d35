from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Student
from .repository import StudentRepository

_COLUMNS = (
    "student_id, first_name, last_name, class_id, birth_date, gender, birth_place, guardian_name, address"
)


def _to_student(r: dict) -> Student:
    return Student(
        student_id=r["student_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        class_id=r["class_id"],
        birth_date=r.get("birth_date") or "",
        gender=r.get("gender") or "",
        birth_place=r.get("birth_place") or "",
        guardian_name=r.get("guardian_name") or "",
        address=r.get("address") or "",
    )


def _params(s: Student) -> tuple:
    return (
        s.student_id,
        s.first_name,
        s.last_name,
        s.class_id,
        s.birth_date,
        s.gender,
        s.birth_place,
        s.guardian_name,
        s.address,
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at, last_name, first_name")
            return [_to_student(r) for r in fetchall(cur)]

    def list_by_class(self, class_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE class_id=%s ORDER BY created_at, last_name, first_name",
                (class_id,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def count_by_class(self) -> dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, COUNT(*) AS n FROM students GROUP BY class_id")
            return {r["class_id"]: int(r["n"]) for r in fetchall(cur)}

    def add_many(self, students: Iterable[Student]) -> int:
        rows = [_params(s) for s in students]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"INSERT INTO students({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                rows,
            )
        return len(rows)

    def update(self, student: Student) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET first_name=%s, last_name=%s, class_id=%s, birth_date=%s, gender=%s,
                    birth_place=%s, guardian_name=%s, address=%s
                WHERE student_id=%s
                """,
                _params(student)[1:] + (student.student_id,),
            )
            return cur.rowcount > 0

    def delete_many(self, student_ids: Iterable[str]) -> int:
        clause, params = in_clause(student_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM students WHERE student_id IN {clause}", params)
            return int(cur.rowcount)
