from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from hr_console.app.ui.listing_view import read_field

UNASSIGNED_DEPARTMENT = "Unassigned"
NOT_AVAILABLE = "N/A"


def parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def employee_name(user: Any) -> str:
    if user is None:
        return ""
    first = read_field(user, "first_name") or ""
    last = read_field(user, "last_name") or ""
    return f"{first} {last}".strip()


def department_name(departments: Iterable[Any], department_id: Any) -> str:
    if not department_id:
        return UNASSIGNED_DEPARTMENT
    for department in departments:
        if read_field(department, "id") == department_id:
            return str(read_field(department, "name") or UNASSIGNED_DEPARTMENT)
    return UNASSIGNED_DEPARTMENT


def format_percent(part: int, whole: int) -> str:
    return f"{(part / whole) * 100:.1f}%"
