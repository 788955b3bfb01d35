from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.classes.memory_class_repository import InMemoryClassRepository
from src.school_attendance.school_attendance.classes.model import ClassRoom
from src.school_attendance.school_attendance.core.constants import INSIGHT_EMPTY_MESSAGE
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.core.exceptions import AuthorizationError, ValidationError
from src.school_attendance.school_attendance.students.memory_student_repository import InMemoryStudentRepository
from src.school_attendance.school_attendance.students.model import StudentDraft
from src.school_attendance.school_attendance.students.service import StudentService


def test_missing_required_fields_are_all_reported(container, school):
    with pytest.raises(ValidationError) as exc:
        container.student_service.add_student(current_role=Role.ADMIN, draft=StudentDraft(first_name="  "))

    assert set(exc.value.fields) == {"first_name", "last_name", "class_id"}
    assert len(container.student_service.list_students()) == 3


def test_unknown_class_is_rejected(container, school):
    draft = StudentDraft(first_name="A", last_name="B", class_id="ghost")

    with pytest.raises(ValidationError):
        container.student_service.add_student(current_role=Role.ADMIN, draft=draft)


def test_fields_are_trimmed_and_birth_date_normalized(container, school):
    draft = StudentDraft.from_mapping(
        {"first_name": " Amina ", "last_name": "Saidi", "class_id": school["c2"], "birth_date": "2008/05/02", "extra": 1}
    )

    student = container.student_service.add_student(current_role=Role.ADMIN, draft=draft)

    assert student.first_name == "Amina"
    assert student.birth_date == "2008-05-02"


def test_search_matches_names_and_id_case_insensitively(container, school):
    svc = container.student_service

    assert [s.student_id for s in svc.list_students(search="bekh")] == [school["s1"]]
    assert [s.student_id for s in svc.list_students(search="MARWA")] == [school["s3"]]
    assert [s.student_id for s in svc.list_students(search=school["s2"])] == [school["s2"]]
    assert {s.student_id for s in svc.list_students(class_id=school["c1"])} == {school["s1"], school["s2"]}


def test_bulk_delete_previews_and_cascades_attendance(container, school):
    for sid in (school["s1"], school["s2"]):
        container.attendance_service.mark(
            current_role=Role.TEACHER,
            current_user_id=school["t1"],
            student_id=sid,
            att_date=date(2024, 1, 7),
            session_id=1,
            status=AttendanceStatus.ABSENT,
        )

    preview = container.student_service.preview_deletion([school["s1"], school["s1"]])
    assert len(preview.students) == 1
    assert preview.attendance_records == 1

    container.student_service.delete_students(current_role=Role.ADMIN, student_ids=[school["s1"]])

    assert [r.student_id for r in container.attendance_service.list_records()] == [school["s2"]]
    assert school["s1"] not in {s.student_id for s in container.student_service.list_students()}


def test_empty_selection_cannot_be_deleted(container, school):
    with pytest.raises(ValidationError):
        container.student_service.delete_students(current_role=Role.ADMIN, student_ids=[])


def test_import_reports_rejected_drafts(container, school):
    drafts = [
        StudentDraft(first_name="Lina", last_name="Haddad", class_id=school["c1"]),
        StudentDraft(first_name="NoClass", last_name="X"),
    ]

    result = container.student_service.import_students(current_role=Role.ADMIN, drafts=drafts)

    assert result.imported == 1
    assert [index for index, _ in result.rejected] == [1]


def test_teacher_cannot_add_students(container, school):
    with pytest.raises(AuthorizationError):
        container.student_service.add_student(
            current_role=Role.TEACHER, draft=StudentDraft(first_name="A", last_name="B", class_id=school["c1"])
        )


def _absent(container, student_id, day=7):
    container.attendance_service.mark(
        current_role=Role.TEACHER,
        current_user_id="t-x",
        student_id=student_id,
        att_date=date(2024, 1, day),
        session_id=1,
        status=AttendanceStatus.ABSENT,
    )


def test_deleting_every_marked_student_resets_dashboard(container, school, generator):
    _absent(container, school["s1"])
    _absent(container, school["s3"])
    container.dashboard_service.refresh_insight().result(timeout=5)
    assert container.dashboard_service.insight().text == generator.text

    container.student_service.delete_students(current_role=Role.ADMIN, student_ids=[school["s1"], school["s3"]])

    assert container.dashboard_service.insight().text == INSIGHT_EMPTY_MESSAGE
    assert container.dashboard_service.snapshot().unique_absences == 0


class FailingStudentRepository(InMemoryStudentRepository):
    def delete_many(self, student_ids):
        raise RuntimeError("storage unavailable")


def _standalone_service(students_repo, on_change=None):
    classes = InMemoryClassRepository()
    classes.add(ClassRoom("c1", "1 Science 1"))
    attendance = InMemoryAttendanceRepository()
    svc = StudentService(students_repo, classes, attendance, on_change=on_change)
    student = svc.add_student(
        current_role=Role.ADMIN, draft=StudentDraft(first_name="Nawal", last_name="Bekhtar", class_id="c1")
    )
    attendance.upsert(
        AttendanceRecord(
            record_id="r1",
            student_id=student.student_id,
            date=date(2024, 1, 7),
            session_id=1,
            status=AttendanceStatus.ABSENT,
            marked_by="t1",
        )
    )
    return svc, attendance, student


def test_deletion_with_history_notifies_listener_once():
    calls = []
    svc, attendance, student = _standalone_service(InMemoryStudentRepository(), on_change=lambda: calls.append(1))

    svc.delete_students(current_role=Role.ADMIN, student_ids=[student.student_id])

    assert calls == [1]
    assert attendance.list_all() == []


def test_deletion_without_history_does_not_notify(container, school):
    calls = []
    svc = StudentService(
        container.students_repo, container.classes_repo, container.attendance_repo, on_change=lambda: calls.append(1)
    )

    svc.delete_students(current_role=Role.ADMIN, student_ids=[school["s2"]])

    assert calls == []


def test_failed_student_removal_keeps_attendance_history():
    svc, attendance, student = _standalone_service(FailingStudentRepository())

    with pytest.raises(RuntimeError):
        svc.delete_students(current_role=Role.ADMIN, student_ids=[student.student_id])

    assert [r.record_id for r in attendance.list_all()] == ["r1"]
    assert svc.get_student(student.student_id) == student
