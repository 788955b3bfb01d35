from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import DAYS_OF_WEEK
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def _require_text_type(value: object, field_name: str) -> None:
    # JSON bodies can carry numbers, lists or objects where text is expected.
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text", fields={field_name: "invalid"})


def require_non_empty(value: Optional[str], field_name: str) -> str:
    _require_text_type(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", fields={field_name: "required"})
    return value.strip()


def optional_text(value: Optional[str], field_name: str = "value") -> str:
    _require_text_type(value, field_name)
    return (value or "").strip()


def require_iso_date(value: str | date | None, field_name: str = "date") -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(require_non_empty(value, field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD", fields={field_name: "invalid"})


def require_working_day(value: Optional[str]) -> str:
    day = require_non_empty(value, "day")
    if day not in DAYS_OF_WEEK:
        raise ValidationError(f"{day} is not a working day", fields={"day": "invalid"})
    return day
