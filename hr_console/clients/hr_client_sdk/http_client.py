from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from hr_console.clients.hr_client_sdk.config import SDKConfig
from hr_console.clients.hr_client_sdk.errors import ApiError

logger = logging.getLogger(__name__)

RETRYABLE_METHODS = frozenset({"GET"})
AUTH_STATUS_CODES = frozenset({401, 403})
DEFAULT_HEADERS = {"Accept": "application/json"}


class HttpClient:
    """Thin JSON client for the HR API; only idempotent reads are retried."""

    def __init__(
        self,
        config: SDKConfig | None = None,
        client: httpx.Client | None = None,
        sleeper: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config or SDKConfig()
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
            headers=DEFAULT_HEADERS,
        )
        self._max_attempts = max(1, self.config.retry_max_attempts)
        self._backoff_ms = max(0, self.config.retry_backoff_ms)
        self._sleep = sleeper or time.sleep
        self._auth_error_handler: Callable[[ApiError], None] | None = None

    def register_auth_error_handler(self, handler: Callable[[ApiError], None] | None) -> None:
        self._auth_error_handler = handler

    def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        method = method.upper()
        url = path if path.startswith("/") else f"/{path}"
        request_headers = dict(headers or {})
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        attempts = self._max_attempts if method in RETRYABLE_METHODS else 1

        for attempt in range(1, attempts + 1):
            last_attempt = attempt == attempts
            try:
                response = self._client.request(method, url, json=json_body, headers=request_headers, params=params)
            except httpx.TransportError as exc:
                if last_attempt:
                    raise ApiError(
                        code="NETWORK_ERROR",
                        message="Network error while calling the HR API",
                        details=str(exc),
                    ) from exc
                self._wait_before_retry(method, url, attempt, reason=type(exc).__name__)
                continue

            if response.is_success:
                return _decode(response)

            error = ApiError.from_http_response(response)
            if not last_attempt and _is_server_error(response.status_code):
                self._wait_before_retry(method, url, attempt, reason=str(response.status_code))
                continue
            if response.status_code in AUTH_STATUS_CODES and self._auth_error_handler is not None:
                self._auth_error_handler(error)
            raise error

        raise ApiError(code="NETWORK_ERROR", message="Network error while calling the HR API", details="retry exhausted")

    def close(self) -> None:
        self._client.close()

    def _wait_before_retry(self, method: str, url: str, attempt: int, reason: str) -> None:
        delay = (self._backoff_ms * attempt) / 1000
        logger.warning("retrying %s %s after %s (attempt %d, wait %.2fs)", method, url, reason, attempt, delay)
        self._sleep(delay)


def _is_server_error(status_code: int) -> bool:
    return 500 <= status_code <= 599


def _decode(response: httpx.Response) -> dict[str, Any]:
    """Decode a successful response; list bodies are wrapped under ``data``."""
    if response.status_code == 204 or not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {"data": payload}
