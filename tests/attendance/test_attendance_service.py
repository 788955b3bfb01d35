from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.export import build_register_frame
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError

DAY = date(2024, 1, 7)


def _mark(container, student_id, status, *, session_id=1, att_date=DAY, role=Role.TEACHER, user_id="t-x"):
    return container.attendance_service.mark(
        current_role=role,
        current_user_id=user_id,
        student_id=student_id,
        att_date=att_date,
        session_id=session_id,
        status=status,
    )


def test_marking_twice_replaces_status_and_keeps_record_id(container, school):
    first = _mark(container, school["s1"], AttendanceStatus.ABSENT)
    second = _mark(container, school["s1"], AttendanceStatus.LATE)

    records = container.attendance_service.list_records()
    assert len(records) == 1
    assert records[0].status == AttendanceStatus.LATE
    assert second.record_id == first.record_id


def test_unmarked_student_defaults_to_present(container, school):
    _mark(container, school["s1"], AttendanceStatus.ABSENT)

    rows = container.attendance_service.roster(class_id=school["c1"], att_date=DAY, session_id=1)

    by_id = {r.student.student_id: r for r in rows}
    assert by_id[school["s1"]].status == AttendanceStatus.ABSENT
    assert by_id[school["s1"]].marked is True
    assert by_id[school["s2"]].status == AttendanceStatus.PRESENT
    assert by_id[school["s2"]].marked is False
    assert (
        container.attendance_service.status_for(student_id=school["s2"], att_date=DAY, session_id=1)
        == AttendanceStatus.PRESENT
    )


def test_roster_accepts_iso_date_strings(container, school):
    rows = container.attendance_service.roster(class_id=school["c2"], att_date="2024-01-07", session_id="3")

    assert [r.student.student_id for r in rows] == [school["s3"]]


def test_unknown_session_is_rejected(container, school):
    with pytest.raises(ValidationError):
        _mark(container, school["s1"], AttendanceStatus.ABSENT, session_id=8)


def test_unknown_status_is_rejected(container, school):
    with pytest.raises(ValidationError):
        _mark(container, school["s1"], "SICK")


def test_bad_date_is_rejected(container, school):
    with pytest.raises(ValidationError):
        _mark(container, school["s1"], AttendanceStatus.ABSENT, att_date="07/01/2024")


def test_unknown_student_is_rejected(container, school):
    with pytest.raises(NotFoundError):
        _mark(container, "nobody", AttendanceStatus.ABSENT)


def test_marking_without_role_is_refused(container, school):
    with pytest.raises(AuthorizationError):
        _mark(container, school["s1"], AttendanceStatus.ABSENT, role=None)


def test_marking_triggers_insight_refresh(container, school, generator):
    _mark(container, school["s1"], AttendanceStatus.ABSENT)
    container.dashboard_service.refresh_insight().result(timeout=5)

    assert container.dashboard_service.insight().text == generator.text
    assert generator.prompts


def test_register_frame_lists_newest_day_first(container, school):
    _mark(container, school["s1"], AttendanceStatus.ABSENT, att_date=date(2024, 1, 7))
    _mark(container, school["s3"], AttendanceStatus.LATE, att_date=date(2024, 1, 8), user_id=school["t1"])

    df = build_register_frame(
        container.attendance_service.list_records(),
        container.students_repo.list_all(),
        container.classes_repo.list_all(),
        teacher_names={school["t1"]: "Ahmed Benali"},
    )

    assert list(df["Date"]) == ["2024-01-08", "2024-01-07"]
    assert list(df["Status"]) == ["LATE", "ABSENT"]
    assert df.iloc[0]["Class"] == "1 Letters 1"
    assert df.iloc[0]["Marked by"] == "Ahmed Benali"
    assert df.iloc[1]["Session"] == "08:00 - 09:00"


@pytest.mark.parametrize("bad_date", [20240101, ["2024-01-07"], {"y": 2024}])
def test_non_text_date_is_rejected(container, school, bad_date):
    with pytest.raises(ValidationError) as exc:
        _mark(container, school["s1"], AttendanceStatus.ABSENT, att_date=bad_date)

    assert exc.value.fields == {"date": "invalid"}
    assert container.attendance_service.list_records() == []
