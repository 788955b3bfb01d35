from __future__ import annotations

from typing import Sequence

from ..core.constants import SESSION_SLOTS
from ..core.exceptions import ValidationError
from .model import Session

_SESSIONS: tuple[Session, ...] = tuple(
    Session(session_id=sid, start_time=start, end_time=end, is_morning=morning)
    for sid, start, end, morning in SESSION_SLOTS
)
_BY_ID = {s.session_id: s for s in _SESSIONS}


def list_sessions() -> Sequence[Session]:
    return _SESSIONS


def morning_sessions() -> Sequence[Session]:
    return tuple(s for s in _SESSIONS if s.is_morning)


def afternoon_sessions() -> Sequence[Session]:
    return tuple(s for s in _SESSIONS if not s.is_morning)


def get_session(session_id: int | str) -> Session:
    try:
        return _BY_ID[int(session_id)]
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"Unknown session: {session_id}", fields={"session_id": "invalid"})
