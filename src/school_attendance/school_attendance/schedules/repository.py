from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import ScheduleItem


class ScheduleRepository(Protocol):
    def get_slot(self, *, class_id: str, day: str, session_id: int) -> Optional[ScheduleItem]:
        raise NotImplementedError

    def upsert(self, item: ScheduleItem) -> ScheduleItem:
        """Create or replace the item for (class_id, day, session_id).

        Returns the stored item.
        """

        raise NotImplementedError

    def delete_slot(self, *, class_id: str, day: str, session_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[ScheduleItem]:
        raise NotImplementedError

    def list_for_class(self, class_id: str) -> Sequence[ScheduleItem]:
        raise NotImplementedError

    def count_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def delete_for_teachers(self, teacher_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def delete_for_class(self, class_id: str) -> int:
        raise NotImplementedError
