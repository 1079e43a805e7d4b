from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from hr_console.app.config import AppConfig
from hr_console.app.domain.departments import employees_in_department, find_by_id
from hr_console.app.error_presenter import show_error
from hr_console.app.export.csv_exporter import export_current_view, view_rows
from hr_console.app.export.errors import ExportError
from hr_console.app.export.pdf_exporter import export_pdf
from hr_console.app.export.xlsx_exporter import export_xlsx
from hr_console.app.infrastructure.logging.logger import get_logger, log_action
from hr_console.app.records_source import RecordsSource
from hr_console.app.reports.attendance import build_daily_chart, summarize_attendance
from hr_console.app.reports.report_rows import (
    REPORT_TITLES,
    attendance_trend,
    export_table,
    leave_distribution,
    report_filename,
)
from hr_console.app.state import MAIN_MENU, SessionState
from hr_console.app.ui import pages
from hr_console.app.ui.data_table import DataTable
from hr_console.app.ui.filters import clean_filters, prompt_date, prompt_department_id
from hr_console.app.ui.forms import FormStatus, build_form_state, department_defaults, map_api_validation_errors, validate_department_form
from hr_console.app.ui.listing_view import hydrate_view_state, serialize_view_state
from hr_console.app.ui.pagination import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from hr_console.app.ui.permission_map import (
    PERMISSIONS,
    can_edit_permissions,
    default_permissions,
    effective_permissions,
    toggle_permission,
)
from hr_console.app.ui.table_printer import print_data_table
from hr_console.clients.hr_client_sdk.errors import ApiError

logger = get_logger(__name__)

REPORT_WINDOW_DAYS = 30


@dataclass
class ListingData:
    screen: pages.ScreenSpec
    records: list[Any]
    lookup: list[Any] | None = None


@dataclass
class ListingAction:
    label: str
    # returns True when the listing must be reloaded from the API
    handler: Callable[[DataTable], bool]


@dataclass
class ReportFilters:
    start: date
    end: date
    department_id: int | None = None


@dataclass
class ConsoleOptions:
    page_size: int = DEFAULT_PAGE_SIZE
    export_dir: str = "out/exports"
    today: Callable[[], date] = field(default=date.today)

    @classmethod
    def from_config(cls, config: AppConfig) -> "ConsoleOptions":
        return cls(page_size=config.page_size, export_dir=config.export_dir)


class AdminConsole:
    def __init__(self, source: RecordsSource, options: ConsoleOptions | None = None) -> None:
        self.source = source
        self.options = options or ConsoleOptions()

    def run(self, session: SessionState) -> None:
        session.current_module = MAIN_MENU
        while True:
            print("\nHR Console")
            print(f"Role: {session.role or 'N/A'}")
            print("1. Employees")
            print("2. Departments")
            print("3. Leave requests")
            print("4. Roles & permissions")
            print("5. Attendance report")
            print("6. Leave report")
            print("7. Attendance overview")
            print("0. Exit")
            option = input("Select an option: ").strip()
            if option == "0":
                return
            handler = {
                "1": self.list_employees,
                "2": self.list_departments,
                "3": self.list_leave_requests,
                "4": self.list_roles,
                "5": lambda current: self.show_report(current, "attendance"),
                "6": lambda current: self.show_report(current, "leave"),
                "7": self.show_attendance_overview,
            }.get(option)
            if handler is None:
                print("Invalid option.")
                continue
            handler(session)
            session.current_module = MAIN_MENU

    # screens

    def list_employees(self, session: SessionState) -> None:
        if not self._require(session, "employees.view"):
            return

        def _load(force_refresh: bool) -> ListingData:
            departments = self.source.departments(force_refresh=force_refresh)
            employees = self.source.employees(force_refresh=force_refresh)
            return ListingData(pages.employees_screen(departments), employees)

        actions: dict[str, ListingAction] = {}
        if session.can("employees.delete"):
            actions["d"] = ListingAction("delete employee", lambda table: self._delete_employee(session))
        self._run_listing_loop("employees", session, _load, actions)

    def list_departments(self, session: SessionState) -> None:
        if not self._require(session, "departments.view"):
            return

        def _load(force_refresh: bool) -> ListingData:
            employees = self.source.employees(force_refresh=force_refresh)
            departments = self.source.departments(force_refresh=force_refresh)
            return ListingData(pages.departments_screen(employees), departments)

        actions = {"v": ListingAction("view employees", lambda table: self._view_department_employees())}
        if session.can("departments.manage"):
            actions["a"] = ListingAction("add department", lambda table: self._save_department(session, None))
            actions["e"] = ListingAction("edit department", lambda table: self._edit_department(session))
            actions["d"] = ListingAction("delete department", lambda table: self._delete_department(session))
        self._run_listing_loop("departments", session, _load, actions)

    def list_leave_requests(self, session: SessionState) -> None:
        if not self._require(session, "leave.view"):
            return

        def _load(force_refresh: bool) -> ListingData:
            employees = self.source.employees(force_refresh=force_refresh)
            requests = self.source.leave_requests(force_refresh=force_refresh)
            return ListingData(pages.leave_requests_screen(employees), requests, lookup=employees)

        self._run_listing_loop("leave", session, _load)

    def list_roles(self, session: SessionState) -> None:
        if not self._require(session, "roles.view"):
            return

        def _load(force_refresh: bool) -> ListingData:
            return ListingData(pages.roles_screen(), self.source.employees(force_refresh=force_refresh))

        actions: dict[str, ListingAction] = {}
        if can_edit_permissions(session.role):
            actions["e"] = ListingAction("edit permissions", lambda table: self._edit_permissions(session))
        else:
            print("[info] Only administrators can change roles and permissions.")
        self._run_listing_loop("roles", session, _load, actions)

    def show_report(self, session: SessionState, kind: str) -> None:
        if not self._require(session, "reports.view"):
            return
        today = self.options.today()
        filters = ReportFilters(start=today - timedelta(days=REPORT_WINDOW_DAYS), end=today)
        state: dict[str, Any] = {"entries": [], "departments": []}

        def _load(force_refresh: bool) -> ListingData:
            departments = self.source.departments(force_refresh=force_refresh)
            fetch = self.source.attendance_report if kind == "attendance" else self.source.leave_report
            entries = fetch(filters.start, filters.end, filters.department_id, force_refresh=force_refresh)
            state["entries"], state["departments"] = entries, departments
            screen = (
                pages.attendance_report_screen(departments)
                if kind == "attendance"
                else pages.leave_report_screen(departments)
            )
            print(f"Period: {filters.start.isoformat()} - {filters.end.isoformat()}  department={filters.department_id or 'all'}")
            return ListingData(screen, entries)

        actions = {
            "g": ListingAction("change period/department", lambda table: self._prompt_report_filters(filters)),
            "o": ListingAction("chart data", lambda table: self._print_report_chart(kind, state["entries"])),
        }
        if session.can("reports.export"):
            actions["e"] = ListingAction(
                "export excel",
                lambda table: self._export_report(session, kind, "xlsx", table, state["departments"], filters),
            )
            actions["d"] = ListingAction(
                "export pdf",
                lambda table: self._export_report(session, kind, "pdf", table, state["departments"], filters),
            )
        self._run_listing_loop(f"{kind}_report", session, _load, actions)

    def show_attendance_overview(self, session: SessionState) -> None:
        if not self._require(session, "attendance.view"):
            return
        view = "weekly"
        while True:
            today = self.options.today()
            start = today - timedelta(days=6 if view == "weekly" else 29)
            try:
                records = self.source.attendance(start)
            except ApiError as error:
                show_error("Loading attendance overview", error)
                return

            print(f"\nAttendance Overview ({view})")
            for bucket in build_daily_chart(records, view=view, today=today):
                print(f"  {bucket.label:>5}  present={bucket.present:<3} late={bucket.late:<3} absent={bucket.absent:<3}")
            summary = summarize_attendance(records)
            print(f"Average Check-in Time: {summary.avg_check_in}")
            print(f"Average Check-out Time: {summary.avg_check_out}")
            print(f"Average Working Hours: {summary.avg_working_hours}")
            print(f"Punctuality Rate: {summary.punctuality_rate}")

            command = input("w=weekly, m=monthly, b=back: ").strip().lower()
            if command == "w":
                view = "weekly"
            elif command == "m":
                view = "monthly"
            elif command == "b":
                return

    # listing loop

    def _run_listing_loop(
        self,
        module: str,
        session: SessionState,
        load: Callable[[bool], ListingData],
        actions: dict[str, ListingAction] | None = None,
    ) -> None:
        session.current_module = module
        actions = actions or {}
        table: DataTable | None = None
        force_refresh = False

        while True:
            try:
                data = load(force_refresh)
            except ApiError as error:
                notice = show_error(f"Loading {module.replace('_', ' ')}", error)
                log_action(logger, module, "list", session.role, "error", trace_id=error.trace_id, code=error.code)
                if not notice.retryable:
                    input("Press Enter to go back: ")
                    return
                command = input("Commands: t=retry, b=back: ").strip().lower()
                if command == "b":
                    return
                force_refresh = True
                continue
            force_refresh = False

            if table is None:
                table = self._restore_table(session, module, data)
            else:
                table.set_columns(data.screen.columns)
                table.set_records(data.records, data.lookup)

            print_data_table(data.screen.title, table)
            if table.search_value:
                print(f"Search: {table.search_value!r}")
            extra = "".join(f", {key}={action.label}" for key, action in actions.items())
            print(
                "\nCommands: n=next, p=prev, z=page size, s=sort, f=search, c=clear search, "
                f"r=refresh, x=export csv{extra}, b=back"
            )
            command = input("cmd: ").strip().lower()

            if command == "n":
                table.next_page()
            elif command == "p":
                table.previous_page()
            elif command == "z":
                self._prompt_page_size(table)
            elif command == "s":
                self._prompt_sort(table)
            elif command == "f":
                if data.screen.global_filter or data.screen.search_column:
                    table.search(input(f"{data.screen.search_placeholder} ").strip())
                else:
                    print("[info] This listing has no search box.")
            elif command == "c":
                table.clear_filters()
            elif command == "r":
                print("[refresh] Reloading while keeping search, sort and page...")
                force_refresh = True
            elif command == "x":
                self._export_csv(session, module, table)
            elif command == "b":
                self._save_table_state(session, module, table)
                return
            elif command in actions:
                try:
                    force_refresh = actions[command].handler(table)
                except ApiError as error:
                    show_error(actions[command].label.capitalize(), error)
            self._save_table_state(session, module, table)

    def _restore_table(self, session: SessionState, module: str, data: ListingData) -> DataTable:
        table = pages.build_table(data.screen, data.records, data.lookup, page_size=self.options.page_size)
        stored = session.listing_view_by_module.get(module)
        if stored:
            table.apply_view_state(hydrate_view_state(stored, data.screen.columns))
        search = session.filters_by_module.get(module, {}).get("search")
        if search:
            table.search(search)
        return table

    def _save_table_state(self, session: SessionState, module: str, table: DataTable) -> None:
        session.listing_view_by_module[module] = serialize_view_state(table.view_state())
        session.filters_by_module[module] = clean_filters({"search": table.search_value})

    def _prompt_page_size(self, table: DataTable) -> None:
        options = "/".join(str(option) for option in PAGE_SIZE_OPTIONS)
        requested = input(f"Rows per page ({options}): ").strip()
        if requested.isdigit() and int(requested) in PAGE_SIZE_OPTIONS:
            table.set_page_size(int(requested))
        else:
            self._print_validation_error(f"Rows per page must be one of {options}.")

    def _prompt_sort(self, table: DataTable) -> None:
        sortable = [column.key for column in table.columns if column.sortable]
        key = input(f"Column ({', '.join(sortable)}): ").strip()
        if key not in sortable:
            self._print_validation_error(f"Unknown column '{key}'.")
            return
        table.toggle_sort(key)

    # exports

    def _export_csv(self, session: SessionState, module: str, table: DataTable) -> None:
        columns = table.columns
        path = export_current_view(
            module=module,
            rows=view_rows(columns, table.sorted_rows()),
            headers=[column.label for column in columns],
            output_dir=self.options.export_dir,
            filters=session.filters_by_module.get(module, {}),
        )
        log_action(logger, module, "export_csv", session.role, "success", path=str(path))
        print(f"CSV exported: {path}")

    def _export_report(
        self,
        session: SessionState,
        kind: str,
        file_format: str,
        table: DataTable,
        departments: list[Any],
        filters: ReportFilters,
    ) -> bool:
        headers, rows = export_table(kind, table.sorted_rows(), departments)
        path = Path(self.options.export_dir) / report_filename(kind, filters.start, filters.end, file_format)
        try:
            if file_format == "xlsx":
                written = export_xlsx(path=path, sheet_title=REPORT_TITLES[kind], headers=headers, rows=rows)
            else:
                written = export_pdf(
                    path=path,
                    title=REPORT_TITLES[kind],
                    start=filters.start,
                    end=filters.end,
                    headers=headers,
                    rows=rows,
                )
        except ExportError as error:
            show_error(f"Exporting {kind} report ({file_format})", error)
            log_action(logger, f"{kind}_report", f"export_{file_format}", session.role, "empty")
            return False
        log_action(logger, f"{kind}_report", f"export_{file_format}", session.role, "success", path=str(written))
        print(f"Report exported: {written}")
        return False

    # report helpers

    def _prompt_report_filters(self, filters: ReportFilters) -> bool:
        new_start = prompt_date("Start date", filters.start)
        new_end = prompt_date("End date", filters.end)
        if new_start > new_end:
            self._print_validation_error("Start date must not be after end date.")
            return False
        filters.start, filters.end = new_start, new_end
        filters.department_id = prompt_department_id()
        return True

    def _print_report_chart(self, kind: str, entries: list[Any]) -> bool:
        if not entries:
            print("No data available for the selected period")
            return False
        if kind == "attendance":
            print("\nAttendance Overview")
            for point in attendance_trend(entries, today=self.options.today()):
                print(f"  {point['date']}  present={point['present']} late={point['late']} absent={point['absent']}")
        else:
            print("\nLeave Distribution")
            for slice_ in leave_distribution(entries):
                print(f"  {slice_['name']:<9} {slice_['value']}")
        return False

    # mutations

    def _delete_employee(self, session: SessionState) -> bool:
        employee_id = _prompt_id("Employee id to delete")
        if employee_id is None:
            return False
        if input("This action cannot be undone. Type 'y' to confirm: ").strip().lower() != "y":
            return False
        self.source.delete_employee(employee_id)
        log_action(logger, "employees", "delete", session.role, "success", employee_id=employee_id)
        print("Employee deleted: the employee has been deleted successfully.")
        return True

    def _view_department_employees(self) -> bool:
        department_id = _prompt_id("Department id")
        if department_id is None:
            return False
        department = find_by_id(self.source.departments(), department_id)
        if department is None:
            print("[empty] Department not found.")
            return False
        members = employees_in_department(self.source.employees(), department_id)
        print(f"\n{department.get('name')} employees ({len(members)})")
        if not members:
            print("No employees in this department.")
        for employee in members:
            print(f"  {employee.get('first_name', '')} {employee.get('last_name', '')} <{employee.get('email', '')}>")
        return False

    def _edit_department(self, session: SessionState) -> bool:
        department_id = _prompt_id("Department id to edit")
        if department_id is None:
            return False
        department = find_by_id(self.source.departments(), department_id)
        if department is None:
            print("[empty] Department not found.")
            return False
        return self._save_department(session, department)

    def _save_department(self, session: SessionState, department: dict[str, Any] | None) -> bool:
        defaults = department_defaults(department)
        name = input(f"Name [{defaults['name']}]: ").strip() or defaults["name"]
        description = input(f"Description [{defaults['description']}]: ").strip() or defaults["description"]
        result = validate_department_form(name, description)
        form_state = build_form_state(result)
        if not form_state.submit_enabled:
            for field_name, message in result.field_errors.items():
                self._print_validation_error(message, code=f"FIELD_{field_name.upper()}")
            return False

        try:
            if department is None:
                self.source.create_department(result.values)
                outcome_message = "Department created: new department has been created successfully."
            else:
                self.source.update_department(department["id"], result.values)
                outcome_message = "Department updated: department information has been updated successfully."
        except ApiError as error:
            for field_name, message in map_api_validation_errors(error.details).items():
                self._print_validation_error(message, code=f"FIELD_{field_name.upper()}")
            show_error("Saving department", error)
            log_action(logger, "departments", "save", session.role, FormStatus.ERROR.value, trace_id=error.trace_id, code=error.code)
            return False
        log_action(logger, "departments", "create" if department is None else "update", session.role, FormStatus.SUCCESS.value)
        print(outcome_message)
        return True

    def _delete_department(self, session: SessionState) -> bool:
        department_id = _prompt_id("Department id to delete")
        if department_id is None:
            return False
        affected = len(employees_in_department(self.source.employees(), department_id))
        print(f"This will permanently delete the department and could affect {affected} employee(s).")
        if input("Type 'y' to confirm: ").strip().lower() != "y":
            return False
        self.source.delete_department(department_id)
        log_action(logger, "departments", "delete", session.role, "success", department_id=department_id)
        print("Department deleted: the department has been deleted successfully.")
        return True

    def _edit_permissions(self, session: SessionState) -> bool:
        user_id = _prompt_id("User id")
        if user_id is None:
            return False
        user = find_by_id(self.source.employees(), user_id)
        if user is None:
            print("[empty] User not found.")
            return False

        role = input(f"Role [{user.get('role')}]: ").strip().lower() or str(user.get("role") or "")
        custom = [
            permission
            for permission in user.get("custom_permissions") or []
            if permission not in default_permissions(role)
        ]
        while True:
            granted = set(effective_permissions(role, custom))
            defaults = set(default_permissions(role))
            for permission in PERMISSIONS:
                marker = "x" if permission.id in granted else " "
                suffix = " (role default)" if permission.id in defaults else ""
                print(f"  [{marker}] {permission.id:<20} {permission.label}{suffix}")
            choice = input("Permission id to toggle (blank = save, q = cancel): ").strip()
            if choice == "q":
                return False
            if not choice:
                break
            if choice in defaults:
                print("[info] Role defaults cannot be removed.")
            custom = toggle_permission(role, custom, choice)

        self.source.update_permissions(user_id, role, custom)
        log_action(logger, "roles", "update_permissions", session.role, "success", user_id=user_id)
        print("Success: user permissions updated successfully")
        return True

    # guards

    def _require(self, session: SessionState, permission: str) -> bool:
        if session.can(permission):
            return True
        print(f"[denied] You do not have permission for this screen ({permission}).")
        return False

    def _print_validation_error(self, message: str, code: str = "UI_VALIDATION") -> None:
        print(f"[validation] code={code} message={message}")


def _prompt_id(label: str) -> int | None:
    raw = input(f"{label}: ").strip()
    if not raw.isdigit():
        print("[validation] An integer id is required.")
        return None
    return int(raw)
