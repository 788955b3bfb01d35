from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationError
from src.school_attendance.school_attendance.core.policy import Capability, can, require


def test_admin_holds_every_capability():
    assert all(can(Role.ADMIN, c) for c in Capability)


@pytest.mark.parametrize(
    "capability,allowed",
    [
        (Capability.VIEW_DASHBOARD, True),
        (Capability.MARK_ATTENDANCE, True),
        (Capability.MANAGE_STUDENTS, False),
        (Capability.IMPORT_STUDENTS, False),
        (Capability.MANAGE_TEACHERS, False),
        (Capability.MANAGE_CLASSES, False),
        (Capability.MANAGE_SCHEDULE, False),
    ],
)
def test_teacher_capabilities(capability, allowed):
    assert can("TEACHER", capability) is allowed


def test_unknown_or_missing_role_has_nothing():
    assert not can(None, Capability.VIEW_DASHBOARD)
    assert not can("JANITOR", Capability.VIEW_DASHBOARD)


def test_require_raises_authorization_error():
    with pytest.raises(AuthorizationError):
        require(Role.TEACHER, Capability.MANAGE_SCHEDULE)
