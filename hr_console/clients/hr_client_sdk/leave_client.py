from __future__ import annotations

from typing import Any

from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.normalizers import normalize_records


class LeaveClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_leave_requests(self, access_token: str | None = None, status: str | None = None) -> list[dict[str, Any]]:
        params = {"status": status} if status else None
        payload = self.http_client.request("GET", "/api/leave-requests", token=access_token, params=params)
        return normalize_records(payload)
