from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def list_teachers(self) -> Sequence[User]:
        return [u for u in self._users.values() if u.role == Role.TEACHER]

    def add(self, user: User) -> None:
        self._users[user.user_id] = user

    def update(self, user: User) -> bool:
        if user.user_id not in self._users:
            return False
        self._users[user.user_id] = user
        return True

    def delete_many(self, user_ids: Iterable[str]) -> int:
        removed = 0
        for user_id in set(user_ids):
            if self._users.pop(user_id, None) is not None:
                removed += 1
        return removed
