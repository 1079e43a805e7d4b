from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, time, timedelta
from typing import Any

from hr_console.app.reports.attendance import average_clock_time, check_in_of, is_late, is_present
from hr_console.app.reports.common import department_name, employee_name, format_percent, parse_date
from hr_console.app.ui.listing_view import read_field

REPORT_KINDS = ("attendance", "leave")
LEAVE_TYPES = ("annual", "sick", "personal", "unpaid", "other")

ATTENDANCE_EXPORT_HEADERS = ["Employee Name", "Department", "Present Days", "Total Days", "Attendance Rate"]
LEAVE_EXPORT_HEADERS = ["Employee Name", "Department", "Annual Leave", "Sick Leave", "Unpaid Leave", "Total Days"]
REPORT_TITLES = {"attendance": "Attendance Report", "leave": "Leave Report"}


def _records(entry: Any) -> list[Any]:
    return list(read_field(entry, "records") or [])


def _leave_requests(entry: Any) -> list[Any]:
    return list(read_field(entry, "leave_requests") or [])


def _user(entry: Any) -> Any:
    return read_field(entry, "user") or {}


def _approved(requests: Iterable[Any]) -> list[Any]:
    return [request for request in requests if read_field(request, "status") == "approved"]


def leave_days(request: Any) -> int:
    start = parse_date(read_field(request, "start_date"))
    end = parse_date(read_field(request, "end_date"))
    if start is None or end is None:
        return 0
    return (end - start).days + 1


def approved_leave_count(entry: Any, leave_type: str) -> int:
    return sum(1 for request in _approved(_leave_requests(entry)) if read_field(request, "type") == leave_type)


def total_leave_days(entry: Any) -> int:
    return sum(leave_days(request) for request in _approved(_leave_requests(entry)))


def present_days(entry: Any) -> int:
    return sum(1 for record in _records(entry) if is_present(record))


def absent_days(entry: Any) -> int:
    return sum(1 for record in _records(entry) if read_field(record, "status") == "absent")


def late_days(entry: Any) -> int:
    return sum(1 for record in _records(entry) if is_late(record))


def average_check_in(entry: Any) -> time | None:
    return average_clock_time(moment for moment in map(check_in_of, _records(entry)) if moment is not None)


def attendance_rate(entry: Any) -> str:
    records = _records(entry)
    if not records:
        return "0%"
    return format_percent(present_days(entry), len(records))


def entry_employee_name(entry: Any) -> str:
    return employee_name(_user(entry))


def entry_department_name(entry: Any, departments: Sequence[Any]) -> str:
    return department_name(departments, read_field(_user(entry), "department_id"))


def leave_distribution(entries: Iterable[Any]) -> list[dict[str, Any]]:
    counts = {leave_type: 0 for leave_type in LEAVE_TYPES}
    for entry in entries:
        for request in _approved(_leave_requests(entry)):
            leave_type = read_field(request, "type")
            counts[leave_type if leave_type in counts else "other"] += 1
    return [{"name": leave_type.capitalize(), "value": count} for leave_type, count in counts.items()]


def attendance_trend(entries: Iterable[Any], today: date | None = None, days: int = 7) -> list[dict[str, Any]]:
    """Employees present, absent and late per day over the last ``days`` days."""
    end = today or date.today()
    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    rows = list(entries)
    trend = []
    for day in window:
        day_records = [
            [record for record in _records(entry) if parse_date(read_field(record, "date")) == day] for entry in rows
        ]
        trend.append(
            {
                "date": day.strftime("%m/%d"),
                "present": sum(1 for records in day_records if any(is_present(record) for record in records)),
                "absent": sum(
                    1 for records in day_records if any(read_field(record, "status") == "absent" for record in records)
                ),
                "late": sum(1 for records in day_records if any(is_late(record) for record in records)),
            }
        )
    return trend


def export_table(kind: str, entries: Iterable[Any], departments: Sequence[Any]) -> tuple[list[str], list[list[Any]]]:
    if kind not in REPORT_KINDS:
        raise ValueError(f"Unknown report kind: {kind}")

    rows: list[list[Any]] = []
    for entry in entries:
        name = entry_employee_name(entry)
        department = entry_department_name(entry, departments)
        if kind == "attendance":
            rows.append([name, department, present_days(entry), len(_records(entry)), attendance_rate(entry)])
        else:
            rows.append(
                [
                    name,
                    department,
                    approved_leave_count(entry, "annual"),
                    approved_leave_count(entry, "sick"),
                    approved_leave_count(entry, "unpaid"),
                    total_leave_days(entry),
                ]
            )
    headers = ATTENDANCE_EXPORT_HEADERS if kind == "attendance" else LEAVE_EXPORT_HEADERS
    return list(headers), rows


def report_filename(kind: str, start: date, end: date, extension: str) -> str:
    return f"{kind}_report_{start.isoformat()}_to_{end.isoformat()}.{extension}"
