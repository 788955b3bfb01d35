from __future__ import annotations

import json
from typing import Mapping, Optional, Sequence

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import format_iso_date


def serialize_records(
    records: Sequence[AttendanceRecord],
    class_names_by_student: Optional[Mapping[str, str]] = None,
) -> str:
    class_names_by_student = class_names_by_student or {}
    rows = [
        {
            "studentId": r.student_id,
            "className": class_names_by_student.get(r.student_id),
            "date": format_iso_date(r.date),
            "weekday": r.date.strftime("%A"),
            "sessionId": r.session_id,
            "status": r.status.value,
        }
        for r in records
    ]
    return json.dumps(rows, ensure_ascii=False)


def build_prompt(
    records: Sequence[AttendanceRecord],
    *,
    language: str = "English",
    class_names_by_student: Optional[Mapping[str, str]] = None,
) -> str:
    return (
        f"Based on the following school attendance data: {serialize_records(records, class_names_by_student)}. "
        f"Write a short analysis in {language} (at most one paragraph of about 120 words) of the main trends, "
        "for example the day with the most absences and the most disciplined class, "
        "followed by concrete suggestions to improve attendance."
    )
