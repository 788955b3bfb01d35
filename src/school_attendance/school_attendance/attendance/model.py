from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: status of one student in one session of one day."""

    record_id: str
    student_id: str
    date: date
    session_id: int
    status: AttendanceStatus
    marked_by: str


@dataclass(frozen=True)
class RosterRow:
    """Read-model for the marking sheet of a class/date/session."""

    student: Student
    status: AttendanceStatus
    marked: bool
