"""Column sets and table configuration for each listing screen."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from hr_console.app.domain.departments import employee_count
from hr_console.app.reports import report_rows
from hr_console.app.reports.attendance import format_time_of_day
from hr_console.app.reports.common import department_name, employee_name, parse_date
from hr_console.app.ui.data_table import DataTable
from hr_console.app.ui.listing_view import ColumnDef, read_field
from hr_console.app.ui.pagination import DEFAULT_PAGE_SIZE
from hr_console.app.ui.permission_map import effective_permissions
from hr_console.app.ui.search import DEFAULT_LOOKUP_KEY


@dataclass(frozen=True)
class ScreenSpec:
    module: str
    title: str
    columns: list[ColumnDef]
    global_filter: bool = False
    search_column: str | None = None
    search_placeholder: str = "Search..."
    lookup_key: str = DEFAULT_LOOKUP_KEY


def _full_name(record: Any) -> str:
    return employee_name(record)


def _date_text(value: Any) -> str:
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else ""


def employees_screen(departments: Sequence[Any]) -> ScreenSpec:
    return ScreenSpec(
        module="employees",
        title="Our Team",
        search_placeholder="Search employees...",
        global_filter=True,
        columns=[
            ColumnDef("id", "ID"),
            ColumnDef("name", "Name", accessor=_full_name),
            ColumnDef("email", "Email"),
            ColumnDef("position", "Position"),
            ColumnDef(
                "department",
                "Department",
                accessor=lambda employee: department_name(departments, read_field(employee, "department_id")),
            ),
            ColumnDef("role", "Role"),
            ColumnDef("is_active", "Status"),
        ],
    )


def departments_screen(employees: Sequence[Any]) -> ScreenSpec:
    return ScreenSpec(
        module="departments",
        title="Departments",
        search_column="name",
        search_placeholder="Search departments...",
        columns=[
            ColumnDef("id", "ID"),
            ColumnDef("name", "Name"),
            ColumnDef("description", "Description"),
            ColumnDef(
                "employees",
                "Employees",
                accessor=lambda department: employee_count(employees, read_field(department, "id")),
                render=lambda count: f"View ({count})",
            ),
        ],
    )


def leave_requests_screen(employees: Sequence[Any]) -> ScreenSpec:
    by_id = {read_field(employee, "id"): employee for employee in employees}
    return ScreenSpec(
        module="leave",
        title="Leave Requests",
        global_filter=True,
        search_placeholder="Search by employee, type, reason or status...",
        columns=[
            ColumnDef("id", "ID"),
            ColumnDef(
                "employee",
                "Employee",
                accessor=lambda request: employee_name(by_id.get(read_field(request, "user_id"))),
            ),
            ColumnDef("type", "Type", render=lambda value: str(value or "").capitalize()),
            ColumnDef("start_date", "Start", render=_date_text),
            ColumnDef("end_date", "End", render=_date_text),
            ColumnDef("days", "Days", accessor=report_rows.leave_days),
            ColumnDef("reason", "Reason"),
            ColumnDef("status", "Status", render=lambda value: str(value or "").capitalize()),
        ],
    )


def roles_screen() -> ScreenSpec:
    return ScreenSpec(
        module="roles",
        title="Roles & Permissions",
        global_filter=True,
        search_placeholder="Search users...",
        columns=[
            ColumnDef("id", "ID"),
            ColumnDef("name", "Name", accessor=_full_name),
            ColumnDef("email", "Email"),
            ColumnDef("position", "Position"),
            ColumnDef("role", "Role"),
            ColumnDef(
                "permissions",
                "Permissions",
                accessor=lambda user: len(
                    effective_permissions(read_field(user, "role"), read_field(user, "custom_permissions"))
                ),
            ),
        ],
    )


def attendance_report_screen(departments: Sequence[Any]) -> ScreenSpec:
    return ScreenSpec(
        module="attendance_report",
        title="Attendance Report",
        global_filter=True,
        columns=[
            ColumnDef("employee_name", "Employee", accessor=report_rows.entry_employee_name),
            ColumnDef(
                "department",
                "Department",
                accessor=lambda entry: report_rows.entry_department_name(entry, departments),
            ),
            ColumnDef("present", "Present Days", accessor=report_rows.present_days),
            ColumnDef("absent", "Absent Days", accessor=report_rows.absent_days),
            ColumnDef("late", "Late Days", accessor=report_rows.late_days),
            ColumnDef(
                "avg_check_in",
                "Avg. Check In",
                accessor=report_rows.average_check_in,
                render=format_time_of_day,
            ),
        ],
    )


def leave_report_screen(departments: Sequence[Any]) -> ScreenSpec:
    return ScreenSpec(
        module="leave_report",
        title="Leave Report",
        global_filter=True,
        columns=[
            ColumnDef("employee_name", "Employee", accessor=report_rows.entry_employee_name),
            ColumnDef(
                "department",
                "Department",
                accessor=lambda entry: report_rows.entry_department_name(entry, departments),
            ),
            ColumnDef("annual_leave", "Annual Leave", accessor=lambda entry: report_rows.approved_leave_count(entry, "annual")),
            ColumnDef("sick_leave", "Sick Leave", accessor=lambda entry: report_rows.approved_leave_count(entry, "sick")),
            ColumnDef("unpaid_leave", "Unpaid Leave", accessor=lambda entry: report_rows.approved_leave_count(entry, "unpaid")),
            ColumnDef("total_days", "Total Days", accessor=report_rows.total_leave_days),
        ],
    )


def build_table(
    screen: ScreenSpec,
    records: Iterable[Any],
    lookup: Iterable[Any] | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DataTable:
    return DataTable(
        records,
        screen.columns,
        search_column=screen.search_column,
        global_filter=screen.global_filter,
        lookup=lookup,
        lookup_key=screen.lookup_key,
        page_size=page_size,
    )
