from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import ADMIN_USER_ID, ADMIN_USER_NAME, SUBJECTS
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import Capability, require
from ..schedules.repository import ScheduleRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role
    subject: Optional[str] = None


@dataclass(frozen=True)
class TeacherDeletionImpact:
    """Shown to the admin before teachers are removed."""

    teachers: list[User]
    schedule_items: int


class AuthService:
    """Use case: pick a role at the login screen.

    There is no credential check; the role decides who the session user is.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def login_as(self, role: Role | str) -> SessionUser:
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Unknown role", fields={"role": "invalid"})

        if role == Role.ADMIN:
            return SessionUser(user_id=ADMIN_USER_ID, name=ADMIN_USER_NAME, role=Role.ADMIN)

        teachers = self._users.list_teachers()
        if not teachers:
            raise ValidationError("No teacher accounts exist yet")
        first = teachers[0]
        return SessionUser(user_id=first.user_id, name=first.name, role=first.role, subject=first.subject)


class TeacherService:
    """Use case: manage teachers (admin)."""

    def __init__(self, users: UserRepository, schedules: ScheduleRepository):
        self._users = users
        self._schedules = schedules

    @staticmethod
    def _require_subject(subject: Optional[str]) -> str:
        subject = require_non_empty(subject, "subject")
        if subject not in SUBJECTS:
            raise ValidationError(f"Unknown subject: {subject}", fields={"subject": "invalid"})
        return subject

    def list_teachers(self) -> Sequence[User]:
        return self._users.list_teachers()

    def get_teacher(self, teacher_id: str) -> User:
        user = self._users.get_by_id(teacher_id)
        if not user or user.role != Role.TEACHER:
            raise NotFoundError("Teacher not found")
        return user

    def assigned_sessions(self, teacher_id: str) -> int:
        return self._schedules.count_for_teachers([teacher_id])

    def create_teacher(self, *, current_role: Role, name: str, subject: str) -> User:
        require(current_role, Capability.MANAGE_TEACHERS)

        teacher = User(
            user_id=new_id(),
            name=require_non_empty(name, "name"),
            role=Role.TEACHER,
            subject=self._require_subject(subject),
        )
        self._users.add(teacher)
        logger.info("teacher created id=%s subject=%s", teacher.user_id, teacher.subject)
        return teacher

    def update_teacher(self, *, current_role: Role, teacher_id: str, name: str, subject: str) -> User:
        require(current_role, Capability.MANAGE_TEACHERS)

        existing = self.get_teacher(teacher_id)
        updated = User(
            user_id=existing.user_id,
            name=require_non_empty(name, "name"),
            role=existing.role,
            subject=self._require_subject(subject),
        )
        if not self._users.update(updated):
            raise NotFoundError("Teacher not found")
        logger.info("teacher updated id=%s", teacher_id)
        return updated

    def preview_deletion(self, teacher_ids: Iterable[str]) -> TeacherDeletionImpact:
        teachers = [self.get_teacher(tid) for tid in dict.fromkeys(teacher_ids)]
        return TeacherDeletionImpact(
            teachers=teachers,
            schedule_items=self._schedules.count_for_teachers(t.user_id for t in teachers),
        )

    def delete_teachers(self, *, current_role: Role, teacher_ids: Iterable[str]) -> TeacherDeletionImpact:
        """Delete teachers and empty every timetable slot they were assigned to."""

        require(current_role, Capability.MANAGE_TEACHERS)

        impact = self.preview_deletion(teacher_ids)
        if not impact.teachers:
            raise ValidationError("No teacher selected")

        ids = [t.user_id for t in impact.teachers]
        cleared = self._schedules.delete_for_teachers(ids)
        self._users.delete_many(ids)
        logger.info("teachers deleted count=%d schedule_items_cleared=%d", len(ids), cleared)
        return impact
