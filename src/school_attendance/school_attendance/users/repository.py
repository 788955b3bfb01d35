from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): the service layer depends on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_teachers(self) -> Sequence[User]:
        raise NotImplementedError

    def add(self, user: User) -> None:
        raise NotImplementedError

    def update(self, user: User) -> bool:
        raise NotImplementedError

    def delete_many(self, user_ids: Iterable[str]) -> int:
        raise NotImplementedError
