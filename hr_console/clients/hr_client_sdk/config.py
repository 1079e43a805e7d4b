from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:5000/"


@dataclass(frozen=True)
class SDKConfig:
    """Connection settings for :class:`HttpClient`; environment parsing lives in the app layer."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 250
