from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.analytics.insights.generator import InsightGenerator
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.students.model import StudentDraft


class StubGenerator(InsightGenerator):
    def __init__(self, text: str = "Attendance looks steady."):
        self.text = text
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def container(generator):
    c = build_container(storage="memory", insight_generator=generator)
    yield c
    c.insight_requester.shutdown()


@pytest.fixture
def school(container):
    """Two classes, two teachers and three students; returns their ids by short name."""

    admin = Role.ADMIN
    c1 = container.class_service.create_class(current_role=admin, name="1 Science 1")
    c2 = container.class_service.create_class(current_role=admin, name="1 Letters 1")
    t1 = container.teacher_service.create_teacher(current_role=admin, name="Ahmed Benali", subject="Mathematics")
    t2 = container.teacher_service.create_teacher(current_role=admin, name="Sara Mahmoud", subject="Philosophy")

    def add(first, last, class_id):
        draft = StudentDraft(first_name=first, last_name=last, class_id=class_id)
        return container.student_service.add_student(current_role=admin, draft=draft).student_id

    return {
        "c1": c1.class_id,
        "c2": c2.class_id,
        "t1": t1.user_id,
        "t2": t2.user_id,
        "s1": add("Nawal", "Bekhtar", c1.class_id),
        "s2": add("Ikram", "Belarbi", c1.class_id),
        "s3": add("Marwa", "Benbrahim", c2.class_id),
    }
