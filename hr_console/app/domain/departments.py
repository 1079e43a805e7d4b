from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from hr_console.app.ui.listing_view import read_field


def employees_in_department(employees: Iterable[Any], department_id: Any) -> list[Any]:
    if department_id is None:
        return []
    return [employee for employee in employees if read_field(employee, "department_id") == department_id]


def employee_count(employees: Iterable[Any], department_id: Any) -> int:
    return len(employees_in_department(employees, department_id))


def find_by_id(records: Iterable[Any], record_id: Any) -> Any | None:
    return next((record for record in records if read_field(record, "id") == record_id), None)
