from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        trace_id = _extract_trace_id(response)
        try:
            payload = response.json()
        except ValueError:
            return cls(
                code="HTTP_ERROR",
                message=response.text or "HTTP request failed",
                trace_id=trace_id,
                status_code=response.status_code,
            )

        if isinstance(payload, dict):
            # the HR backend answers {"message": ...} and, on validation failures, {"errors": ...}
            return cls(
                code=str(payload.get("code") or _code_for_status(response.status_code)),
                message=str(payload.get("message") or response.text or "HTTP request failed"),
                details=payload.get("details") or payload.get("errors"),
                trace_id=payload.get("trace_id") or trace_id,
                status_code=response.status_code,
            )

        return cls(
            code=_code_for_status(response.status_code),
            message=response.text or "HTTP request failed",
            details=payload,
            trace_id=trace_id,
            status_code=response.status_code,
        )


def _code_for_status(status_code: int) -> str:
    if status_code == 401:
        return "UNAUTHORIZED"
    if status_code == 403:
        return "PERMISSION_DENIED"
    if status_code == 404:
        return "NOT_FOUND"
    if status_code in {400, 422}:
        return "VALIDATION_ERROR"
    return "HTTP_ERROR"


def _extract_trace_id(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
        if isinstance(payload, dict) and payload.get("trace_id"):
            return str(payload["trace_id"])
    except ValueError:
        pass
    return response.headers.get("X-Trace-ID") or response.headers.get("X-Request-ID")
