"""Operator-facing error notices.

Every failure the console recovers from is printed as a single notice naming
the step that failed, the mapped code and message, and what to do next. The
listing loop also asks the notice whether a retry can help.
"""
from __future__ import annotations

from dataclasses import dataclass

from hr_console.app.infrastructure.errors.error_mapper import ErrorMapper
from hr_console.clients.hr_client_sdk.errors import ApiError


@dataclass(frozen=True)
class ErrorNotice:
    step: str
    code: str
    message: str
    suggestion: str
    trace_id: str | None = None
    retryable: bool = False

    def render(self) -> str:
        line = f"[error] {self.step}: [{self.code}] {self.message} Next: {self.suggestion}"
        if self.trace_id:
            line += f" (trace_id={self.trace_id})"
        return line


def is_retryable(error: Exception) -> bool:
    """Only network failures and server errors; conflicts and client errors need operator action."""
    if not isinstance(error, ApiError):
        return False
    if error.code == "NETWORK_ERROR":
        return True
    return bool(error.status_code and error.status_code >= 500)


def build_notice(step: str, error: Exception) -> ErrorNotice:
    payload = ErrorMapper.to_payload(error)
    return ErrorNotice(
        step=step,
        code=payload["code"],
        message=payload["message"],
        suggestion=payload["suggestion"],
        trace_id=payload["trace_id"],
        retryable=is_retryable(error),
    )


def show_error(step: str, error: Exception) -> ErrorNotice:
    notice = build_notice(step, error)
    print(notice.render())
    return notice
