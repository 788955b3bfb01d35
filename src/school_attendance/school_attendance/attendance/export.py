from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..classes.model import ClassRoom
from ..core.constants import UNKNOWN_CLASS_NAME
from ..sessions.catalog import get_session
from ..students.model import Student
from .model import AttendanceRecord

REGISTER_COLUMNS = ["Date", "Session", "Class", "Last name", "First name", "Status", "Marked by"]


def build_register_frame(
    records: Sequence[AttendanceRecord],
    students: Sequence[Student],
    classes: Sequence[ClassRoom],
    *,
    teacher_names: dict[str, str] | None = None,
) -> pd.DataFrame:
    """Attendance history as a table, newest day first."""

    teacher_names = teacher_names or {}
    student_by_id = {s.student_id: s for s in students}
    class_names = {c.class_id: c.name for c in classes}

    rows = []
    for r in records:
        s = student_by_id.get(r.student_id)
        rows.append(
            {
                "Date": r.date,
                "Session": get_session(r.session_id).label,
                "Class": class_names.get(s.class_id, UNKNOWN_CLASS_NAME) if s else UNKNOWN_CLASS_NAME,
                "Last name": s.last_name if s else "",
                "First name": s.first_name if s else r.student_id,
                "Status": r.status.value,
                "Marked by": teacher_names.get(r.marked_by, r.marked_by),
            }
        )

    df = pd.DataFrame(rows, columns=REGISTER_COLUMNS)
    if not df.empty:
        df = df.sort_values(["Date", "Session", "Class", "Last name"], ascending=[False, True, True, True])
        df["Date"] = pd.to_datetime(df["Date"]).dt.strftime("%Y-%m-%d")
    return df


def build_register_workbook(
    records: Sequence[AttendanceRecord],
    students: Sequence[Student],
    classes: Sequence[ClassRoom],
    *,
    teacher_names: dict[str, str] | None = None,
) -> bytes:
    df = build_register_frame(records, students, classes, teacher_names=teacher_names)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    return out.getvalue()
