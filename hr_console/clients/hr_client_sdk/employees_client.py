from __future__ import annotations

from typing import Any

from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.normalizers import normalize_record, normalize_records


class EmployeesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_employees(self, access_token: str | None = None) -> list[dict[str, Any]]:
        payload = self.http_client.request("GET", "/api/employees", token=access_token)
        return normalize_records(payload)

    def delete_employee(self, employee_id: int, access_token: str | None = None) -> None:
        self.http_client.request("DELETE", f"/api/employees/{employee_id}", token=access_token)

    def update_permissions(
        self,
        user_id: int,
        role: str,
        custom_permissions: list[str],
        access_token: str | None = None,
    ) -> dict[str, Any]:
        payload = self.http_client.request(
            "PATCH",
            "/api/users/permissions",
            token=access_token,
            json_body={"userId": user_id, "role": role, "customPermissions": list(custom_permissions)},
        )
        return normalize_record(payload)
