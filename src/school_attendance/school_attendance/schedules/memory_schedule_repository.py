from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import ScheduleItem
from .repository import ScheduleRepository

_SlotKey = tuple[str, str, int]


class InMemoryScheduleRepository(ScheduleRepository):
    def __init__(self):
        self._by_slot: dict[_SlotKey, ScheduleItem] = {}

    @staticmethod
    def _key(class_id: str, day: str, session_id: int) -> _SlotKey:
        return (class_id, day, int(session_id))

    def get_slot(self, *, class_id: str, day: str, session_id: int) -> Optional[ScheduleItem]:
        return self._by_slot.get(self._key(class_id, day, session_id))

    def upsert(self, item: ScheduleItem) -> ScheduleItem:
        self._by_slot[self._key(item.class_id, item.day, item.session_id)] = item
        return item

    def delete_slot(self, *, class_id: str, day: str, session_id: int) -> bool:
        return self._by_slot.pop(self._key(class_id, day, session_id), None) is not None

    def list_all(self) -> Sequence[ScheduleItem]:
        return list(self._by_slot.values())

    def list_for_class(self, class_id: str) -> Sequence[ScheduleItem]:
        return [i for i in self._by_slot.values() if i.class_id == class_id]

    def count_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        ids = set(teacher_ids)
        return sum(1 for i in self._by_slot.values() if i.teacher_id in ids)

    def delete_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        ids = set(teacher_ids)
        doomed = [k for k, i in self._by_slot.items() if i.teacher_id in ids]
        for k in doomed:
            del self._by_slot[k]
        return len(doomed)

    def delete_for_class(self, class_id: str) -> int:
        doomed = [k for k, i in self._by_slot.items() if i.class_id == class_id]
        for k in doomed:
            del self._by_slot[k]
        return len(doomed)
