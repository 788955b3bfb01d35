from __future__ import annotations

from enum import Enum

from .enums import Role
from .exceptions import AuthorizationError


class Capability(str, Enum):
    VIEW_DASHBOARD = "VIEW_DASHBOARD"
    MARK_ATTENDANCE = "MARK_ATTENDANCE"
    MANAGE_STUDENTS = "MANAGE_STUDENTS"
    IMPORT_STUDENTS = "IMPORT_STUDENTS"
    MANAGE_TEACHERS = "MANAGE_TEACHERS"
    MANAGE_CLASSES = "MANAGE_CLASSES"
    MANAGE_SCHEDULE = "MANAGE_SCHEDULE"


_GRANTS: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.TEACHER: frozenset({Capability.VIEW_DASHBOARD, Capability.MARK_ATTENDANCE}),
}


def can(role: Role | str | None, capability: Capability) -> bool:
    """Single source of truth for role gating.

    Services and controllers both ask this function; nothing else compares roles.
    """

    if role is None:
        return False
    try:
        role = Role(role)
    except ValueError:
        return False
    return capability in _GRANTS.get(role, frozenset())


def require(role: Role | str | None, capability: Capability) -> None:
    if not can(role, capability):
        raise AuthorizationError("You are not allowed to perform this action")
