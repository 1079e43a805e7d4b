from __future__ import annotations

from typing import Any

from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.normalizers import normalize_record, normalize_records


class DepartmentsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_departments(self, access_token: str | None = None) -> list[dict[str, Any]]:
        payload = self.http_client.request("GET", "/api/departments", token=access_token)
        return normalize_records(payload)

    def create_department(self, department_payload: dict[str, Any], access_token: str | None = None) -> dict[str, Any]:
        payload = self.http_client.request(
            "POST",
            "/api/departments",
            token=access_token,
            json_body=department_payload,
        )
        return normalize_record(payload)

    def update_department(
        self,
        department_id: int,
        department_payload: dict[str, Any],
        access_token: str | None = None,
    ) -> dict[str, Any]:
        payload = self.http_client.request(
            "PUT",
            f"/api/departments/{department_id}",
            token=access_token,
            json_body=department_payload,
        )
        return normalize_record(payload)

    def delete_department(self, department_id: int, access_token: str | None = None) -> None:
        self.http_client.request("DELETE", f"/api/departments/{department_id}", token=access_token)
