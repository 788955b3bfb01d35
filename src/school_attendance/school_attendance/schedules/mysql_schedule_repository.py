from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import ScheduleItem
from .repository import ScheduleRepository

_COLUMNS = "item_id, class_id, teacher_id, day_name, session_id, room"


def _to_item(r: dict) -> ScheduleItem:
    return ScheduleItem(
        item_id=r["item_id"],
        class_id=r["class_id"],
        teacher_id=r["teacher_id"],
        day=r["day_name"],
        session_id=int(r["session_id"]),
        room=r["room"],
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_slot(self, *, class_id: str, day: str, session_id: int) -> Optional[ScheduleItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedule_items
                WHERE class_id=%s AND day_name=%s AND session_id=%s
                """,
                (class_id, day, int(session_id)),
            )
            r = fetchone(cur)
            return _to_item(r) if r else None

    def upsert(self, item: ScheduleItem) -> ScheduleItem:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO schedule_items({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    item_id=VALUES(item_id), teacher_id=VALUES(teacher_id), room=VALUES(room)
                """,
                (item.item_id, item.class_id, item.teacher_id, item.day, int(item.session_id), item.room),
            )
        return item

    def delete_slot(self, *, class_id: str, day: str, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM schedule_items WHERE class_id=%s AND day_name=%s AND session_id=%s",
                (class_id, day, int(session_id)),
            )
            return cur.rowcount > 0

    def list_all(self) -> Sequence[ScheduleItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedule_items ORDER BY class_id, day_name, session_id")
            return [_to_item(r) for r in fetchall(cur)]

    def list_for_class(self, class_id: str) -> Sequence[ScheduleItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM schedule_items WHERE class_id=%s ORDER BY day_name, session_id",
                (class_id,),
            )
            return [_to_item(r) for r in fetchall(cur)]

    def count_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        clause, params = in_clause(teacher_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM schedule_items WHERE teacher_id IN {clause}", params)
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def delete_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        clause, params = in_clause(teacher_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM schedule_items WHERE teacher_id IN {clause}", params)
            return int(cur.rowcount)

    def delete_for_class(self, class_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule_items WHERE class_id=%s", (class_id,))
            return int(cur.rowcount)
