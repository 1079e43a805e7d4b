from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from hr_console.app.infrastructure.logging.logger import get_logger
from hr_console.app.listing_cache import ListingCache
from hr_console.clients.hr_client_sdk.attendance_client import AttendanceClient
from hr_console.clients.hr_client_sdk.departments_client import DepartmentsClient
from hr_console.clients.hr_client_sdk.employees_client import EmployeesClient
from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.leave_client import LeaveClient
from hr_console.clients.hr_client_sdk.reports_client import ReportsClient

EMPLOYEES = "/api/employees"
DEPARTMENTS = "/api/departments"
LEAVE_REQUESTS = "/api/leave-requests"
ATTENDANCE = "/api/attendance"
ATTENDANCE_REPORT = "/api/reports/attendance"
LEAVE_REPORT = "/api/reports/leave"

logger = get_logger(__name__)


@dataclass
class HrClients:
    employees: EmployeesClient
    departments: DepartmentsClient
    leave: LeaveClient
    attendance: AttendanceClient
    reports: ReportsClient

    @classmethod
    def from_http(cls, http_client: HttpClient) -> "HrClients":
        return cls(
            employees=EmployeesClient(http_client),
            departments=DepartmentsClient(http_client),
            leave=LeaveClient(http_client),
            attendance=AttendanceClient(http_client),
            reports=ReportsClient(http_client),
        )


class RecordsSource:
    """Supplies record lists to listing tables and drops them after mutations."""

    def __init__(self, clients: HrClients, cache: ListingCache | None = None, access_token: str | None = None) -> None:
        self.clients = clients
        self.cache = cache or ListingCache()
        self.access_token = access_token

    def employees(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            EMPLOYEES,
            lambda: self.clients.employees.list_employees(self.access_token),
            force_refresh=force_refresh,
        )

    def departments(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            DEPARTMENTS,
            lambda: self.clients.departments.list_departments(self.access_token),
            force_refresh=force_refresh,
        )

    def leave_requests(self, force_refresh: bool = False) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            LEAVE_REQUESTS,
            lambda: self.clients.leave.list_leave_requests(self.access_token),
            force_refresh=force_refresh,
        )

    def attendance(self, start_date: date, force_refresh: bool = False) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            ATTENDANCE,
            lambda: self.clients.attendance.list_attendance(start_date, self.access_token),
            params={"startDate": start_date.isoformat()},
            force_refresh=force_refresh,
        )

    def attendance_report(
        self,
        start_date: date,
        end_date: date,
        department_id: int | None = None,
        force_refresh: bool = False,
    ) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            ATTENDANCE_REPORT,
            lambda: self.clients.reports.attendance_report(start_date, end_date, department_id, self.access_token),
            params=_report_params(start_date, end_date, department_id),
            force_refresh=force_refresh,
        )

    def leave_report(
        self,
        start_date: date,
        end_date: date,
        department_id: int | None = None,
        force_refresh: bool = False,
    ) -> list[dict[str, Any]]:
        return self.cache.get_or_load(
            LEAVE_REPORT,
            lambda: self.clients.reports.leave_report(start_date, end_date, department_id, self.access_token),
            params=_report_params(start_date, end_date, department_id),
            force_refresh=force_refresh,
        )

    def invalidate(self, endpoint: str) -> None:
        dropped = self.cache.invalidate(endpoint)
        logger.info("cache invalidated endpoint=%s entries=%d", endpoint, dropped)

    # mutations

    def delete_employee(self, employee_id: int) -> None:
        self.clients.employees.delete_employee(employee_id, self.access_token)
        self.invalidate(EMPLOYEES)

    def update_permissions(self, user_id: int, role: str, custom_permissions: list[str]) -> dict[str, Any]:
        updated = self.clients.employees.update_permissions(user_id, role, custom_permissions, self.access_token)
        self.invalidate(EMPLOYEES)
        return updated

    def create_department(self, payload: dict[str, Any]) -> dict[str, Any]:
        created = self.clients.departments.create_department(payload, self.access_token)
        self.invalidate(DEPARTMENTS)
        return created

    def update_department(self, department_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        updated = self.clients.departments.update_department(department_id, payload, self.access_token)
        self.invalidate(DEPARTMENTS)
        return updated

    def delete_department(self, department_id: int) -> None:
        self.clients.departments.delete_department(department_id, self.access_token)
        self.invalidate(DEPARTMENTS)
        # employees keep a stale department_id until reloaded
        self.invalidate(EMPLOYEES)


def _report_params(start_date: date, end_date: date, department_id: int | None) -> dict[str, Any]:
    return {"startDate": start_date.isoformat(), "endDate": end_date.isoformat(), "departmentId": department_id}
