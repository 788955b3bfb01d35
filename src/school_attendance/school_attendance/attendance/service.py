from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.ids import new_id
from ..common.validators import require_iso_date
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import Capability, require
from ..sessions.catalog import get_session
from ..students.repository import StudentRepository
from .model import AttendanceRecord, RosterRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._on_change = on_change

    @staticmethod
    def _parse_status(status: AttendanceStatus | str) -> AttendanceStatus:
        try:
            return AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status: {status}", fields={"status": "invalid"})

    def mark(
        self,
        *,
        current_role: Role,
        current_user_id: str,
        student_id: str,
        att_date: date | str,
        session_id: int,
        status: AttendanceStatus | str,
    ) -> AttendanceRecord:
        """Record a status for (student, date, session); re-marking replaces it in place."""

        require(current_role, Capability.MARK_ATTENDANCE)

        att_date = require_iso_date(att_date, "date")
        session = get_session(session_id)
        status = self._parse_status(status)
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        stored = self._attendance.upsert(
            AttendanceRecord(
                record_id=new_id(),
                student_id=student_id,
                date=att_date,
                session_id=session.session_id,
                status=status,
                marked_by=current_user_id,
            )
        )
        logger.info(
            "attendance marked student=%s date=%s session=%d status=%s by=%s",
            student_id, att_date, session.session_id, status.value, current_user_id,
        )

        if self._on_change:
            self._on_change()
        return stored

    def status_for(self, *, student_id: str, att_date: date, session_id: int) -> AttendanceStatus:
        """Stored status, or PRESENT when nobody marked the student yet."""

        rec = self._attendance.get(student_id=student_id, att_date=att_date, session_id=int(session_id))
        return rec.status if rec else AttendanceStatus.PRESENT

    def roster(self, *, class_id: str, att_date: date | str, session_id: int) -> Sequence[RosterRow]:
        att_date = require_iso_date(att_date, "date")
        session = get_session(session_id)

        students = self._students.list_by_class(class_id)
        marked = {
            r.student_id: r
            for r in self._attendance.list_for_session(
                student_ids=[s.student_id for s in students],
                att_date=att_date,
                session_id=session.session_id,
            )
        }
        return [
            RosterRow(
                student=s,
                status=marked[s.student_id].status if s.student_id in marked else AttendanceStatus.PRESENT,
                marked=s.student_id in marked,
            )
            for s in students
        ]

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()
