"""Dashboard aggregates over the attendance record set.

Every function here is pure: same inputs, same output, no I/O.

Daily counting rule: a student counts as absent (or late) at most once per
calendar day, however many sessions of that day were missed.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..classes.model import ClassRoom
from ..core.constants import (
    DEFAULT_ALERT_STREAK_THRESHOLD,
    DEFAULT_CLASS_RANKING_LIMIT,
    UNKNOWN_CLASS_NAME,
)
from ..core.enums import AttendanceStatus
from ..attendance.model import AttendanceRecord
from ..students.model import Student

_ATTENDED = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


@dataclass(frozen=True)
class ClassAbsenceCount:
    class_id: str
    class_name: str
    absences: int


@dataclass(frozen=True)
class AbsenceAlert:
    student_id: str
    full_name: str
    class_id: str
    class_name: str
    streak: int


@dataclass(frozen=True)
class DashboardSnapshot:
    attendance_rate: str
    unique_absences: int
    unique_lates: int
    class_ranking: list[ClassAbsenceCount]
    alerts: list[AbsenceAlert]


def _daily_pairs(records: Iterable[AttendanceRecord], status: AttendanceStatus) -> set[tuple[str, date]]:
    return {(r.student_id, r.date) for r in records if r.status == status}


def unique_absence_count(records: Iterable[AttendanceRecord]) -> int:
    return len(_daily_pairs(records, AttendanceStatus.ABSENT))


def unique_late_count(records: Iterable[AttendanceRecord]) -> int:
    return len(_daily_pairs(records, AttendanceStatus.LATE))


def attendance_rate(records: Sequence[AttendanceRecord], students: Sequence[Student]) -> str:
    """Percentage of non-absent student-days, one decimal, as a string.

    Possible student-days = students x distinct recorded dates (at least one date).
    """

    if not records:
        return "100"

    distinct_dates = len({r.date for r in records}) or 1
    possible = len(students) * distinct_dates
    if possible == 0:
        return "100"

    rate = 100 * (1 - unique_absence_count(records) / possible)
    return f"{rate:.1f}"


def class_absence_ranking(
    records: Iterable[AttendanceRecord],
    students: Iterable[Student],
    classes: Iterable[ClassRoom],
    *,
    limit: int = DEFAULT_CLASS_RANKING_LIMIT,
) -> list[ClassAbsenceCount]:
    class_of = {s.student_id: s.class_id for s in students}

    per_class: dict[str, int] = defaultdict(int)
    for student_id, _ in _daily_pairs(records, AttendanceStatus.ABSENT):
        class_id = class_of.get(student_id)
        if class_id is not None:
            per_class[class_id] += 1

    ranking = [
        ClassAbsenceCount(class_id=c.class_id, class_name=c.name, absences=per_class.get(c.class_id, 0))
        for c in classes
    ]
    ranking.sort(key=lambda x: x.absences, reverse=True)
    return ranking[: max(int(limit), 0)]


def absence_streak(statuses_by_date: dict[date, set[AttendanceStatus]]) -> int:
    """Consecutive most-recent dates with an absence and no presence/late record."""

    streak = 0
    for day in sorted(statuses_by_date, reverse=True):
        statuses = statuses_by_date[day]
        if any(s in statuses for s in _ATTENDED):
            break
        if AttendanceStatus.ABSENT in statuses:
            streak += 1
    return streak


def consecutive_absence_alerts(
    records: Iterable[AttendanceRecord],
    students: Iterable[Student],
    classes: Iterable[ClassRoom],
    *,
    threshold: int = DEFAULT_ALERT_STREAK_THRESHOLD,
) -> list[AbsenceAlert]:
    by_student: dict[str, dict[date, set[AttendanceStatus]]] = defaultdict(lambda: defaultdict(set))
    for r in records:
        by_student[r.student_id][r.date].add(r.status)

    class_names = {c.class_id: c.name for c in classes}

    alerts: list[AbsenceAlert] = []
    for s in students:
        history = by_student.get(s.student_id)
        if not history:
            continue
        streak = absence_streak(history)
        if streak >= threshold:
            alerts.append(
                AbsenceAlert(
                    student_id=s.student_id,
                    full_name=s.full_name,
                    class_id=s.class_id,
                    class_name=class_names.get(s.class_id, UNKNOWN_CLASS_NAME),
                    streak=streak,
                )
            )

    alerts.sort(key=lambda a: a.streak, reverse=True)
    return alerts


def build_snapshot(
    records: Sequence[AttendanceRecord],
    students: Sequence[Student],
    classes: Sequence[ClassRoom],
    *,
    alert_threshold: int = DEFAULT_ALERT_STREAK_THRESHOLD,
    ranking_limit: int = DEFAULT_CLASS_RANKING_LIMIT,
) -> DashboardSnapshot:
    return DashboardSnapshot(
        attendance_rate=attendance_rate(records, students),
        unique_absences=unique_absence_count(records),
        unique_lates=unique_late_count(records),
        class_ranking=class_absence_ranking(records, students, classes, limit=ranking_limit),
        alerts=consecutive_absence_alerts(records, students, classes, threshold=alert_threshold),
    )
