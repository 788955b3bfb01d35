from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass

from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..core.constants import DEFAULT_ALERT_STREAK_THRESHOLD, DEFAULT_CLASS_RANKING_LIMIT
from ..students.repository import StudentRepository
from ..users.repository import UserRepository
from .aggregator import DashboardSnapshot, build_snapshot
from .insights.requester import InsightRequester


@dataclass(frozen=True)
class InsightView:
    text: str
    loading: bool


class DashboardService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        users: UserRepository,
        requester: InsightRequester,
        *,
        alert_threshold: int = DEFAULT_ALERT_STREAK_THRESHOLD,
        ranking_limit: int = DEFAULT_CLASS_RANKING_LIMIT,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._users = users
        self._requester = requester
        self._alert_threshold = int(alert_threshold)
        self._ranking_limit = int(ranking_limit)

    def snapshot(self) -> DashboardSnapshot:
        return build_snapshot(
            self._attendance.list_all(),
            self._students.list_all(),
            self._classes.list_all(),
            alert_threshold=self._alert_threshold,
            ranking_limit=self._ranking_limit,
        )

    def counts(self) -> dict:
        return {
            "students": len(self._students.list_all()),
            "teachers": len(self._users.list_teachers()),
            "classes": len(self._classes.list_all()),
        }

    def insight(self) -> InsightView:
        return InsightView(text=self._requester.current(), loading=self._requester.loading)

    def refresh_insight(self) -> "Future[str]":
        class_names = {c.class_id: c.name for c in self._classes.list_all()}
        class_by_student = {
            s.student_id: class_names.get(s.class_id, s.class_id) for s in self._students.list_all()
        }
        return self._requester.refresh(self._attendance.list_all(), class_names_by_student=class_by_student)
