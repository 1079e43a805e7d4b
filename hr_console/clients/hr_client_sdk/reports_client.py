from __future__ import annotations

from datetime import date
from typing import Any

from hr_console.clients.hr_client_sdk.http_client import HttpClient
from hr_console.clients.hr_client_sdk.normalizers import normalize_records


class ReportsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def attendance_report(
        self,
        start_date: date,
        end_date: date,
        department_id: int | None = None,
        access_token: str | None = None,
    ) -> list[dict[str, Any]]:
        return self._fetch("attendance", start_date, end_date, department_id, access_token)

    def leave_report(
        self,
        start_date: date,
        end_date: date,
        department_id: int | None = None,
        access_token: str | None = None,
    ) -> list[dict[str, Any]]:
        return self._fetch("leave", start_date, end_date, department_id, access_token)

    def _fetch(
        self,
        kind: str,
        start_date: date,
        end_date: date,
        department_id: int | None,
        access_token: str | None,
    ) -> list[dict[str, Any]]:
        params = _build_query_params(
            startDate=start_date.isoformat(),
            endDate=end_date.isoformat(),
            departmentId=department_id,
        )
        payload = self.http_client.request("GET", f"/api/reports/{kind}", token=access_token, params=params)
        return normalize_records(payload)


def _build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
