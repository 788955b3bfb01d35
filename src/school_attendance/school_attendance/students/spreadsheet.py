"""Student list workbook: blank template export and roster import.

Sheet layout (one sheet per class, 1-based rows):
    row 3  school name | ... | "School year <year>" in column E
    row 4  town
    row 5  class name in column E
    row 8  header
    row 9+ one student per row; row 9 of the template is a placeholder example
"""

from __future__ import annotations

import io
import logging
import re
from datetime import date, datetime
from typing import Any, BinaryIO, Iterable, Optional, Sequence
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..classes.model import ClassRoom
from ..core.exceptions import ValidationError
from .model import StudentDraft

logger = logging.getLogger(__name__)

HEADER = ("No", "Last name", "First name", "Gender", "Birth date", "Birth place", "Ref", "Guardian", "Address")
PLACEHOLDER = ("1", "Last name here", "First name here", "F/M", "YYYY/MM/DD", "Birth place", "", "Guardian name", "Full address")

CLASS_NAME_ROW = 4  # 0-based row index of the class name cell (E5)
CLASS_NAME_COL = 4
FIRST_DATA_ROW = 8

_COLUMNS = {
    "last_name": 1,
    "first_name": 2,
    "gender": 3,
    "birth_date": 4,
    "birth_place": 5,
    "guardian_name": 7,
    "address": 8,
}

_INVALID_TITLE_CHARS = re.compile(r"[\\*?/\[\]:]")


def sheet_title(class_name: str) -> str:
    return _INVALID_TITLE_CHARS.sub("", class_name)[:31] or "Class"


def _template_rows(class_name: str, *, school_name: str, town: str, school_year: str) -> list[tuple]:
    blank = ("",) * len(HEADER)
    return [
        blank,
        blank,
        (school_name, "", "", "", f"School year {school_year}", "", "", "", ""),
        (town, "", "", "", "", "", "", "", ""),
        ("", "", "", "", class_name, "", "", "", ""),
        blank,
        blank,
        HEADER,
        PLACEHOLDER,
    ]


def build_template_workbook(
    classes: Sequence[ClassRoom],
    *,
    school_name: str,
    town: str,
    school_year: str,
) -> bytes:
    """One template sheet per class, ready to be filled in and imported back."""

    if not classes:
        raise ValidationError("There are no classes to export")

    wb = Workbook()
    wb.remove(wb.active)

    used: set[str] = set()
    for cls in classes:
        title = sheet_title(cls.name)
        n = 2
        while title in used:
            suffix = f" ({n})"
            title = sheet_title(cls.name)[: 31 - len(suffix)] + suffix
            n += 1
        used.add(title)

        ws = wb.create_sheet(title=title)
        for row in _template_rows(cls.name, school_name=school_name, town=town, school_year=school_year):
            ws.append([v if v != "" else None for v in row])

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def _cell_text(row: Sequence[Any], index: int) -> str:
    if index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _match_class(title: str, rows: Sequence[Sequence[Any]], by_name: dict[str, ClassRoom]) -> Optional[ClassRoom]:
    in_sheet = _cell_text(rows[CLASS_NAME_ROW], CLASS_NAME_COL) if len(rows) > CLASS_NAME_ROW else ""
    return by_name.get(in_sheet) or by_name.get(title)


def sheet_drafts(title: str, rows: Sequence[Sequence[Any]], classes: Iterable[ClassRoom]) -> list[StudentDraft]:
    by_name = {c.name: c for c in classes}
    target = _match_class(title, rows, by_name)
    if not target:
        logger.debug("sheet skipped, no matching class title=%s", title)
        return []

    drafts: list[StudentDraft] = []
    for row in rows[FIRST_DATA_ROW:]:
        if not row:
            continue
        last_name = _cell_text(row, _COLUMNS["last_name"])
        first_name = _cell_text(row, _COLUMNS["first_name"])
        if not last_name or not first_name or last_name == PLACEHOLDER[1]:
            continue
        drafts.append(
            StudentDraft(
                last_name=last_name,
                first_name=first_name,
                gender=_cell_text(row, _COLUMNS["gender"]),
                birth_date=_cell_text(row, _COLUMNS["birth_date"]).replace("/", "-"),
                birth_place=_cell_text(row, _COLUMNS["birth_place"]),
                guardian_name=_cell_text(row, _COLUMNS["guardian_name"]),
                address=_cell_text(row, _COLUMNS["address"]),
                class_id=target.class_id,
            )
        )
    return drafts


def read_student_workbook(source: BinaryIO, classes: Sequence[ClassRoom]) -> list[StudentDraft]:
    """Collect student drafts from every sheet that matches a known class.

    Sheets without a matching class, or that cannot be read, are skipped.
    """

    try:
        wb = load_workbook(source, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError):
        raise ValidationError("The uploaded file is not a readable .xlsx workbook")

    drafts: list[StudentDraft] = []
    try:
        for ws in wb.worksheets:
            try:
                rows = [tuple(r) for r in ws.iter_rows(min_row=1, min_col=1, values_only=True)]
            except (ValueError, TypeError) as e:
                logger.debug("sheet skipped, unreadable title=%s error=%s", ws.title, e)
                continue
            drafts.extend(sheet_drafts(ws.title, rows, classes))
    finally:
        wb.close()
    return drafts
