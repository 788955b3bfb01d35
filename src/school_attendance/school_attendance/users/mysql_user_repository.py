from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        user_id=row["user_id"],
        name=row["name"],
        role=Role(row["role"]),
        subject=row.get("subject"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, role, subject FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_teachers(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, role, subject FROM users WHERE role=%s ORDER BY created_at, name",
                (Role.TEACHER.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def add(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(user_id, name, role, subject) VALUES(%s,%s,%s,%s)",
                (user.user_id, user.name, user.role.value, user.subject),
            )

    def update(self, user: User) -> bool:
        # role is fixed at creation and never rewritten.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, subject=%s WHERE user_id=%s",
                (user.name, user.subject, user.user_id),
            )
            return cur.rowcount > 0

    def delete_many(self, user_ids: Iterable[str]) -> int:
        clause, params = in_clause(user_ids)
        if not params:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM users WHERE user_id IN {clause}", params)
            return int(cur.rowcount)
