from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Collection, Mapping, Optional

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled in one class."""

    student_id: str
    first_name: str
    last_name: str
    class_id: str
    birth_date: str = ""
    gender: str = ""
    birth_place: str = ""
    guardian_name: str = ""
    address: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name}"


_REQUIRED = ("first_name", "last_name", "class_id")


@dataclass(frozen=True)
class StudentDraft:
    """Partial student input (form, spreadsheet row) before validation.

    Only ``to_student`` turns a draft into a ``Student``; an incomplete draft is
    rejected with a ``ValidationError`` naming every missing field.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    class_id: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    birth_place: Optional[str] = None
    guardian_name: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "StudentDraft":
        names = {f.name for f in fields(cls)}
        return cls(**{k: (str(v) if v is not None else None) for k, v in data.items() if k in names})

    def missing_fields(self) -> list[str]:
        return [name for name in _REQUIRED if not (getattr(self, name) or "").strip()]

    def to_student(self, student_id: str, *, known_class_ids: Optional[Collection[str]] = None) -> Student:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(missing),
                fields={name: "required" for name in missing},
            )

        class_id = (self.class_id or "").strip()
        if known_class_ids is not None and class_id not in known_class_ids:
            raise ValidationError(f"Unknown class: {class_id}", fields={"class_id": "invalid"})

        def clean(value: Optional[str]) -> str:
            return (value or "").strip()

        return Student(
            student_id=student_id,
            first_name=clean(self.first_name),
            last_name=clean(self.last_name),
            class_id=class_id,
            birth_date=clean(self.birth_date).replace("/", "-"),
            gender=clean(self.gender),
            birth_place=clean(self.birth_place),
            guardian_name=clean(self.guardian_name),
            address=clean(self.address),
        )
