from __future__ import annotations

from datetime import date
from typing import Any

from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.normalizers import normalize_records


class AttendanceClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_attendance(self, start_date: date, access_token: str | None = None) -> list[dict[str, Any]]:
        payload = self.http_client.request(
            "GET",
            "/api/attendance",
            token=access_token,
            params={"startDate": start_date.isoformat()},
        )
        return normalize_records(payload)
