from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassRoom
from .repository import ClassRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: str) -> Optional[ClassRoom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name FROM classes WHERE class_id=%s", (class_id,))
            r = fetchone(cur)
            return ClassRoom(class_id=r["class_id"], name=r["name"]) if r else None

    def list_all(self) -> Sequence[ClassRoom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name FROM classes ORDER BY created_at, name")
            return [ClassRoom(class_id=r["class_id"], name=r["name"]) for r in fetchall(cur)]

    def add(self, classroom: ClassRoom) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(class_id, name) VALUES(%s,%s)", (classroom.class_id, classroom.name))

    def update(self, classroom: ClassRoom) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE classes SET name=%s WHERE class_id=%s", (classroom.name, classroom.class_id))
            return cur.rowcount > 0

    def delete(self, class_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (class_id,))
            return cur.rowcount > 0
