from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..classes.repository import ClassRepository
from ..common.ids import new_id
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..core.policy import Capability, require
from .model import Student, StudentDraft
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentDeletionImpact:
    """Shown to the admin before students are removed."""

    students: list[Student]
    attendance_records: int


@dataclass(frozen=True)
class ImportResult:
    imported: int
    rejected: list[tuple[int, str]] = field(default_factory=list)


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        classes: ClassRepository,
        attendance: AttendanceRepository,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._students = students
        self._classes = classes
        self._attendance = attendance
        self._on_change = on_change

    def _known_class_ids(self) -> set[str]:
        return {c.class_id for c in self._classes.list_all()}

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self, *, class_id: Optional[str] = None, search: Optional[str] = None) -> Sequence[Student]:
        students = self._students.list_by_class(class_id) if class_id else self._students.list_all()

        term = (search or "").strip().lower()
        if not term:
            return list(students)
        return [
            s
            for s in students
            if term in s.first_name.lower() or term in s.last_name.lower() or term in s.student_id.lower()
        ]

    def add_student(self, *, current_role: Role, draft: StudentDraft) -> Student:
        require(current_role, Capability.MANAGE_STUDENTS)

        student = draft.to_student(new_id(), known_class_ids=self._known_class_ids())
        self._students.add_many([student])
        logger.info("student created id=%s class=%s", student.student_id, student.class_id)
        return student

    def update_student(self, *, current_role: Role, student_id: str, draft: StudentDraft) -> Student:
        require(current_role, Capability.MANAGE_STUDENTS)

        self.get_student(student_id)
        student = draft.to_student(student_id, known_class_ids=self._known_class_ids())
        if not self._students.update(student):
            raise NotFoundError("Student not found")
        return student

    def preview_deletion(self, student_ids: Iterable[str]) -> StudentDeletionImpact:
        students = [self.get_student(sid) for sid in dict.fromkeys(student_ids)]
        return StudentDeletionImpact(
            students=students,
            attendance_records=self._attendance.count_for_students(s.student_id for s in students),
        )

    def delete_students(self, *, current_role: Role, student_ids: Iterable[str]) -> StudentDeletionImpact:
        """Delete students together with their attendance history.

        Students go first: a failure there leaves the attendance history untouched.
        With MySQL the foreign key cascades the history inside the same statement.
        """

        require(current_role, Capability.MANAGE_STUDENTS)

        impact = self.preview_deletion(student_ids)
        if not impact.students:
            raise ValidationError("No student selected")

        ids = [s.student_id for s in impact.students]
        self._students.delete_many(ids)
        removed_records = max(self._attendance.delete_for_students(ids), impact.attendance_records)
        logger.info("students deleted count=%d attendance_records_removed=%d", len(ids), removed_records)

        if removed_records and self._on_change:
            self._on_change()
        return impact

    def import_students(self, *, current_role: Role, drafts: Iterable[StudentDraft]) -> ImportResult:
        """Add every valid draft; invalid ones are reported, not raised."""

        require(current_role, Capability.IMPORT_STUDENTS)

        known = self._known_class_ids()
        accepted: list[Student] = []
        rejected: list[tuple[int, str]] = []
        for index, draft in enumerate(drafts):
            try:
                accepted.append(draft.to_student(new_id(), known_class_ids=known))
            except ValidationError as e:
                rejected.append((index, str(e)))

        imported = self._students.add_many(accepted)
        logger.info("students imported count=%d rejected=%d", imported, len(rejected))
        return ImportResult(imported=imported, rejected=rejected)
