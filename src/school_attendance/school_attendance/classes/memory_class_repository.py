from __future__ import annotations

from typing import Optional, Sequence

from .model import ClassRoom
from .repository import ClassRepository


class InMemoryClassRepository(ClassRepository):
    def __init__(self):
        self._classes: dict[str, ClassRoom] = {}

    def get_by_id(self, class_id: str) -> Optional[ClassRoom]:
        return self._classes.get(class_id)

    def list_all(self) -> Sequence[ClassRoom]:
        return list(self._classes.values())

    def add(self, classroom: ClassRoom) -> None:
        self._classes[classroom.class_id] = classroom

    def update(self, classroom: ClassRoom) -> bool:
        if classroom.class_id not in self._classes:
            return False
        self._classes[classroom.class_id] = classroom
        return True

    def delete(self, class_id: str) -> bool:
        return self._classes.pop(class_id, None) is not None
