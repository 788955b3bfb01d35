from __future__ import annotations

from datetime import date

from src.school_attendance.school_attendance.analytics.aggregator import (
    absence_streak,
    attendance_rate,
    build_snapshot,
    class_absence_ranking,
    consecutive_absence_alerts,
    unique_absence_count,
    unique_late_count,
)
from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.classes.model import ClassRoom
from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.students.model import Student

A = AttendanceStatus.ABSENT
P = AttendanceStatus.PRESENT
L = AttendanceStatus.LATE

CLASSES = [ClassRoom("c1", "1 Science 1"), ClassRoom("c2", "1 Letters 1"), ClassRoom("c3", "2 Mathematics")]


def _student(sid: str, class_id: str = "c1") -> Student:
    return Student(student_id=sid, first_name=f"First{sid}", last_name=f"Last{sid}", class_id=class_id)


def _rec(sid: str, d: date, session_id: int, status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=f"{sid}-{d}-{session_id}",
        student_id=sid,
        date=d,
        session_id=session_id,
        status=status,
        marked_by="t1",
    )


def test_same_day_absences_count_once_and_present_breaks_streak():
    records = [
        _rec("s1", date(2024, 1, 1), 1, A),
        _rec("s1", date(2024, 1, 1), 2, A),
        _rec("s1", date(2024, 1, 2), 1, P),
    ]

    assert unique_absence_count(records) == 1
    assert consecutive_absence_alerts(records, [_student("s1")], CLASSES) == []


def test_empty_records_give_full_rate_and_no_alerts():
    students = [_student(f"s{i}") for i in range(5)]

    snap = build_snapshot([], students, CLASSES)

    assert snap.attendance_rate == "100"
    assert snap.alerts == []
    assert snap.unique_absences == 0


def test_rate_with_no_students_is_full():
    records = [_rec("ghost", date(2024, 1, 1), 1, A)]

    assert attendance_rate(records, []) == "100"


def test_rate_uses_distinct_dates_and_one_decimal():
    students = [_student("s1"), _student("s2"), _student("s3")]
    records = [
        _rec("s1", date(2024, 1, 1), 1, A),
        _rec("s1", date(2024, 1, 1), 3, A),
        _rec("s2", date(2024, 1, 2), 1, P),
    ]

    # 1 absent student-day out of 3 students x 2 dates
    assert attendance_rate(records, students) == "83.3"


def test_rate_decreases_as_absence_pairs_are_added():
    students = [_student("s1"), _student("s2")]
    base = [_rec("s1", date(2024, 1, 1), 1, P), _rec("s2", date(2024, 1, 1), 1, P)]
    one = base + [_rec("s1", date(2024, 1, 1), 2, A)]
    two = one + [_rec("s2", date(2024, 1, 1), 2, A)]

    assert float(attendance_rate(base, students)) > float(attendance_rate(one, students)) > float(
        attendance_rate(two, students)
    )


def test_late_counts_once_per_student_day():
    records = [
        _rec("s1", date(2024, 1, 1), 1, L),
        _rec("s1", date(2024, 1, 1), 2, L),
        _rec("s2", date(2024, 1, 1), 1, L),
        _rec("s1", date(2024, 1, 2), 1, L),
    ]

    assert unique_late_count(records) == 3


def test_streak_counts_recent_absent_days_only():
    history = {
        date(2024, 1, 1): {A},
        date(2024, 1, 2): {P},
        date(2024, 1, 3): {A},
        date(2024, 1, 4): {A},
        date(2024, 1, 7): {A},
    }

    assert absence_streak(history) == 3


def test_late_on_a_day_breaks_the_streak():
    history = {date(2024, 1, 1): {A}, date(2024, 1, 2): {A, L}, date(2024, 1, 3): {A}}

    assert absence_streak(history) == 1


def test_alert_requires_threshold_consecutive_days():
    students = [_student("s1"), _student("s2", "c2"), _student("s3")]
    records = []
    for day in (1, 2, 3):
        records.append(_rec("s1", date(2024, 1, day), 1, A))
    for day in (2, 3):
        records.append(_rec("s2", date(2024, 1, day), 1, A))

    alerts = consecutive_absence_alerts(records, students, CLASSES, threshold=3)

    assert [a.student_id for a in alerts] == ["s1"]
    assert alerts[0].streak == 3
    assert alerts[0].class_name == "1 Science 1"
    assert alerts[0].full_name == "Lasts1 Firsts1"


def test_alert_for_student_in_missing_class_uses_unknown_label():
    students = [_student("s1", "gone")]
    records = [_rec("s1", date(2024, 1, d), 1, A) for d in (1, 2, 3)]

    alerts = consecutive_absence_alerts(records, students, CLASSES)

    assert alerts[0].class_name == "unknown"


def test_class_ranking_orders_by_unique_absences_and_truncates():
    students = [_student("s1", "c1"), _student("s2", "c2"), _student("s3", "c2"), _student("s4", "c3")]
    records = [
        _rec("s1", date(2024, 1, 1), 1, A),
        _rec("s1", date(2024, 1, 1), 2, A),
        _rec("s2", date(2024, 1, 1), 1, A),
        _rec("s3", date(2024, 1, 1), 1, A),
        _rec("s3", date(2024, 1, 2), 1, A),
    ]

    ranking = class_absence_ranking(records, students, CLASSES, limit=2)

    assert [(r.class_id, r.absences) for r in ranking] == [("c2", 3), ("c1", 1)]


def test_class_ranking_keeps_classes_without_absences():
    ranking = class_absence_ranking([], [], CLASSES, limit=3)

    assert [r.absences for r in ranking] == [0, 0, 0]
    assert {r.class_id for r in ranking} == {"c1", "c2", "c3"}
