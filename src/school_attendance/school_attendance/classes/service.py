from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import Capability, require
from ..schedules.repository import ScheduleRepository
from ..students.repository import StudentRepository
from .model import ClassRoom
from .repository import ClassRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassSummary:
    class_id: str
    name: str
    student_count: int


class ClassService:
    def __init__(self, classes: ClassRepository, students: StudentRepository, schedules: ScheduleRepository):
        self._classes = classes
        self._students = students
        self._schedules = schedules

    def list_classes(self) -> Sequence[ClassSummary]:
        counts = self._students.count_by_class()
        return [
            ClassSummary(class_id=c.class_id, name=c.name, student_count=counts.get(c.class_id, 0))
            for c in self._classes.list_all()
        ]

    def get_class(self, class_id: str) -> ClassRoom:
        classroom = self._classes.get_by_id(class_id)
        if not classroom:
            raise NotFoundError("Class not found")
        return classroom

    def create_class(self, *, current_role: Role, name: str) -> ClassRoom:
        require(current_role, Capability.MANAGE_CLASSES)

        classroom = ClassRoom(class_id=new_id(), name=require_non_empty(name, "name"))
        self._classes.add(classroom)
        logger.info("class created id=%s name=%s", classroom.class_id, classroom.name)
        return classroom

    def rename_class(self, *, current_role: Role, class_id: str, name: str) -> ClassRoom:
        require(current_role, Capability.MANAGE_CLASSES)

        self.get_class(class_id)
        renamed = ClassRoom(class_id=class_id, name=require_non_empty(name, "name"))
        self._classes.update(renamed)
        return renamed

    def delete_class(self, *, current_role: Role, class_id: str) -> int:
        """Delete an empty class together with its timetable.

        Returns the number of schedule items removed.
        """

        require(current_role, Capability.MANAGE_CLASSES)

        self.get_class(class_id)
        enrolled = len(self._students.list_by_class(class_id))
        if enrolled:
            raise ValidationError(f"Class still has {enrolled} students; move or delete them first")

        cleared = self._schedules.delete_for_class(class_id)
        self._classes.delete(class_id)
        logger.info("class deleted id=%s schedule_items_cleared=%d", class_id, cleared)
        return cleared
