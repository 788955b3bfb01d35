from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ClassRoom


class ClassRepository(Protocol):
    def get_by_id(self, class_id: str) -> Optional[ClassRoom]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ClassRoom]:
        raise NotImplementedError

    def add(self, classroom: ClassRoom) -> None:
        raise NotImplementedError

    def update(self, classroom: ClassRoom) -> bool:
        raise NotImplementedError

    def delete(self, class_id: str) -> bool:
        raise NotImplementedError
