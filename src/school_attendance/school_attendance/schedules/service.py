from __future__ import annotations

import logging
from typing import Optional

from ..classes.repository import ClassRepository
from ..common.ids import new_id
from ..common.validators import optional_text, require_working_day
from ..core.constants import DAYS_OF_WEEK, DEFAULT_ROOM
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import Capability, require
from ..sessions.catalog import get_session, list_sessions
from ..users.repository import UserRepository
from .model import ScheduleItem
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

ScheduleGrid = dict[str, dict[int, Optional[ScheduleItem]]]


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        classes: ClassRepository,
        users: UserRepository,
        *,
        default_room: str = DEFAULT_ROOM,
    ):
        self._schedules = schedules
        self._classes = classes
        self._users = users
        self._default_room = default_room

    def _require_class(self, class_id: str) -> None:
        if not self._classes.get_by_id(class_id):
            raise NotFoundError("Class not found")

    def grid_for_class(self, class_id: str) -> ScheduleGrid:
        """Day -> session_id -> item (None when the slot is empty)."""

        self._require_class(class_id)
        grid: ScheduleGrid = {day: {s.session_id: None for s in list_sessions()} for day in DAYS_OF_WEEK}
        for item in self._schedules.list_for_class(class_id):
            if item.day in grid:
                grid[item.day][item.session_id] = item
        return grid

    def count_for_teacher(self, teacher_id: str) -> int:
        return self._schedules.count_for_teachers([teacher_id])

    def assign(
        self,
        *,
        current_role: Role,
        class_id: str,
        day: str,
        session_id: int,
        teacher_id: Optional[str],
        room: Optional[str] = None,
    ) -> Optional[ScheduleItem]:
        """Put a teacher in a slot, replacing whatever was there.

        An empty teacher clears the slot and returns None.
        """

        require(current_role, Capability.MANAGE_SCHEDULE)

        day = require_working_day(day)
        session = get_session(session_id)
        self._require_class(class_id)

        teacher_id = optional_text(teacher_id, "teacher_id")
        if not teacher_id:
            self._schedules.delete_slot(class_id=class_id, day=day, session_id=session.session_id)
            return None

        teacher = self._users.get_by_id(teacher_id)
        if not teacher or teacher.role != Role.TEACHER:
            raise ValidationError("Teacher not found", fields={"teacher_id": "invalid"})

        item = ScheduleItem(
            item_id=new_id(),
            class_id=class_id,
            teacher_id=teacher_id,
            day=day,
            session_id=session.session_id,
            room=optional_text(room, "room") or self._default_room,
        )
        stored = self._schedules.upsert(item)
        logger.info("schedule slot set class=%s day=%s session=%d teacher=%s", class_id, day, session.session_id, teacher_id)
        return stored

    def clear(self, *, current_role: Role, class_id: str, day: str, session_id: int) -> bool:
        require(current_role, Capability.MANAGE_SCHEDULE)

        day = require_working_day(day)
        session = get_session(session_id)
        return self._schedules.delete_slot(class_id=class_id, day=day, session_id=session.session_id)
