from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.constants import ADMIN_USER_ID
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.school_attendance.school_attendance.users.memory_user_repository import InMemoryUserRepository
from src.school_attendance.school_attendance.users.service import AuthService


def _fill_schedule(container, school):
    for day, session_id, teacher in (("Sunday", 1, "t1"), ("Monday", 2, "t1"), ("Sunday", 2, "t2")):
        container.schedule_service.assign(
            current_role=Role.ADMIN,
            class_id=school["c1"],
            day=day,
            session_id=session_id,
            teacher_id=school[teacher],
        )


def test_delete_preview_counts_affected_schedule_items(container, school):
    _fill_schedule(container, school)

    impact = container.teacher_service.preview_deletion([school["t1"]])

    assert [t.user_id for t in impact.teachers] == [school["t1"]]
    assert impact.schedule_items == 2


def test_deleting_teacher_removes_only_their_schedule_items(container, school):
    _fill_schedule(container, school)

    container.teacher_service.delete_teachers(current_role=Role.ADMIN, teacher_ids=[school["t1"]])

    remaining = container.schedules_repo.list_all()
    assert [i.teacher_id for i in remaining] == [school["t2"]]
    assert [t.user_id for t in container.teacher_service.list_teachers()] == [school["t2"]]


def test_subject_must_come_from_catalog(container):
    with pytest.raises(ValidationError):
        container.teacher_service.create_teacher(current_role=Role.ADMIN, name="X", subject="Astrology")


def test_update_keeps_role_and_id(container, school):
    updated = container.teacher_service.update_teacher(
        current_role=Role.ADMIN, teacher_id=school["t1"], name="Ahmed B.", subject="Physical Sciences"
    )

    assert updated.user_id == school["t1"]
    assert updated.role == Role.TEACHER
    assert container.teacher_service.get_teacher(school["t1"]).subject == "Physical Sciences"


def test_teacher_cannot_manage_teachers(container, school):
    with pytest.raises(AuthorizationError):
        container.teacher_service.delete_teachers(current_role=Role.TEACHER, teacher_ids=[school["t2"]])


def test_unknown_teacher_in_delete_preview(container):
    with pytest.raises(NotFoundError):
        container.teacher_service.preview_deletion(["ghost"])


def test_login_as_admin_uses_fixed_principal():
    user = AuthService(InMemoryUserRepository()).login_as("ADMIN")

    assert user.user_id == ADMIN_USER_ID
    assert user.role == Role.ADMIN


def test_login_as_teacher_picks_first_teacher(container, school):
    user = container.auth_service.login_as(Role.TEACHER)

    assert user.user_id == school["t1"]
    assert user.subject == "Mathematics"


def test_login_as_teacher_without_teachers_fails():
    with pytest.raises(ValidationError):
        AuthService(InMemoryUserRepository()).login_as("TEACHER")
