from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScheduleItem:
    """Teacher and room assigned to a class for one (day, session) slot."""

    item_id: str
    class_id: str
    teacher_id: str
    day: str
    session_id: int
    room: str
