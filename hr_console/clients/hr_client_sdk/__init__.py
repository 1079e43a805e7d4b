from hr_console.clients.hr_client_sdk.attendance_client import AttendanceClient
from hr_console.clients.hr_client_sdk.config import SDKConfig
from hr_console.clients.hr_client_sdk.departments_client import DepartmentsClient
from hr_console.clients.hr_client_sdk.employees_client import EmployeesClient
from hr_console.clients.hr_client_sdk.errors import ApiError
from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.leave_client import LeaveClient
from hr_console.clients.hr_client_sdk.reports_client import ReportsClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "EmployeesClient",
    "DepartmentsClient",
    "LeaveClient",
    "AttendanceClient",
    "ReportsClient",
]
