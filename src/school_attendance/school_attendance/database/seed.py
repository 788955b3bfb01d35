from __future__ import annotations

import logging

from ..core.enums import Role
from ..students.model import StudentDraft

logger = logging.getLogger(__name__)

DEMO_CLASSES = (
    "1 Common Core Science 1",
    "1 Common Core Science 2",
    "1 Common Core Science 3",
    "1 Common Core Letters 1",
    "1 Common Core Letters 2",
    "2 Experimental Sciences 1",
    "2 Experimental Sciences 2",
    "2 Mathematics",
    "2 Technical Mathematics",
    "2 Management and Economics",
    "2 Letters and Philosophy",
    "2 Foreign Languages",
    "3 Experimental Sciences 1",
    "3 Experimental Sciences 2",
    "3 Mathematics",
    "3 Technical Mathematics",
    "3 Management and Economics",
    "3 Letters and Philosophy 1",
    "3 Letters and Philosophy 2",
    "3 Foreign Languages",
)

DEMO_TEACHERS = (
    ("Ahmed Benali", "Mathematics"),
    ("Sara Mahmoud", "Natural and Life Sciences"),
    ("Kamel Bouzid", "Physical Sciences"),
    ("Leila Menad", "Arabic Language"),
    ("Yacine Belkacem", "History and Geography"),
)

# (first, last, birth date, gender, birth place, guardian, address); all in DEMO_STUDENT_CLASS
DEMO_STUDENTS = (
    ("Nawal", "Bekhtar", "2007-03-12", "F", "Sougueur", "Mohamed", "Chouhada district"),
    ("Ikram", "Belarbi", "2008-01-15", "F", "Tiaret", "Abdelkader", "El Wafa district"),
    ("Marwa", "Benbrahim", "2008-11-20", "F", "Sougueur", "Omar", "El Louz district"),
)
DEMO_STUDENT_CLASS = "3 Letters and Philosophy 1"


def seed_demo_data(container) -> bool:
    """Load the demo roster through the services. Skipped when any class exists.

    Returns True when data was written.
    """

    if container.classes_repo.list_all():
        logger.info("demo seed skipped, classes already present")
        return False

    admin = Role.ADMIN
    class_ids = {}
    for name in DEMO_CLASSES:
        classroom = container.class_service.create_class(current_role=admin, name=name)
        class_ids[name] = classroom.class_id

    for name, subject in DEMO_TEACHERS:
        container.teacher_service.create_teacher(current_role=admin, name=name, subject=subject)

    drafts = [
        StudentDraft(
            first_name=first,
            last_name=last,
            birth_date=birth_date,
            gender=gender,
            birth_place=birth_place,
            guardian_name=guardian,
            address=address,
            class_id=class_ids[DEMO_STUDENT_CLASS],
        )
        for first, last, birth_date, gender, birth_place, guardian, address in DEMO_STUDENTS
    ]
    result = container.student_service.import_students(current_role=admin, drafts=drafts)

    logger.info(
        "demo seed loaded classes=%d teachers=%d students=%d",
        len(DEMO_CLASSES), len(DEMO_TEACHERS), result.imported,
    )
    return True
