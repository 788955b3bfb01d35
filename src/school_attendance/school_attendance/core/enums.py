from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for capability checks."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"


class AttendanceStatus(str, Enum):
    """Per-session attendance status of a student."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
