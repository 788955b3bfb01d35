from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import NotFoundError, ValidationError


def test_listing_includes_student_counts(container, school):
    counts = {c.class_id: c.student_count for c in container.class_service.list_classes()}

    assert counts == {school["c1"]: 2, school["c2"]: 1}


def test_class_with_students_cannot_be_deleted(container, school):
    with pytest.raises(ValidationError):
        container.class_service.delete_class(current_role=Role.ADMIN, class_id=school["c1"])


def test_deleting_empty_class_clears_its_schedule(container, school):
    empty = container.class_service.create_class(current_role=Role.ADMIN, name="2 Mathematics")
    container.schedule_service.assign(
        current_role=Role.ADMIN, class_id=empty.class_id, day="Monday", session_id=2, teacher_id=school["t1"]
    )

    cleared = container.class_service.delete_class(current_role=Role.ADMIN, class_id=empty.class_id)

    assert cleared == 1
    assert container.schedules_repo.list_all() == []
    with pytest.raises(NotFoundError):
        container.class_service.get_class(empty.class_id)


def test_blank_class_name_is_rejected(container):
    with pytest.raises(ValidationError):
        container.class_service.create_class(current_role=Role.ADMIN, name="   ")
