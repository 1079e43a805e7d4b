"""Console configuration read from a ``.env`` file and the process environment.

Variables already present in the environment win over the file. The file is
parsed into a mapping; ``os.environ`` is never written.
"""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from hr_console.app.ui.pagination import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from hr_console.clients.hr_client_sdk.config import DEFAULT_BASE_URL, SDKConfig

TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


@dataclass(frozen=True)
class AppConfig:
    sdk: SDKConfig
    page_size: int
    cache_ttl_seconds: float
    export_dir: str
    role: str = "admin"
    access_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str = ".env", environ: Mapping[str, str] | None = None) -> "AppConfig":
        values = {**read_env_file(env_file), **(os.environ if environ is None else environ)}
        env = _EnvReader(values)
        config = cls(
            sdk=SDKConfig(
                base_url=normalize_base_url(env.text("HR_API_BASE_URL", DEFAULT_BASE_URL)),
                timeout_seconds=env.number("HR_API_TIMEOUT_SECONDS", 30.0),
                verify_ssl=env.flag("HR_API_VERIFY_SSL", True),
                retry_max_attempts=env.integer("HR_API_RETRY_MAX_ATTEMPTS", 3),
                retry_backoff_ms=env.integer("HR_API_RETRY_BACKOFF_MS", 250),
            ),
            page_size=env.integer("HR_CONSOLE_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            cache_ttl_seconds=env.number("HR_CONSOLE_CACHE_TTL_SECONDS", 20.0),
            export_dir=env.text("HR_CONSOLE_EXPORT_DIR", "out/exports"),
            role=env.text("HR_CONSOLE_ROLE", "admin").lower(),
            access_token=env.text("HR_API_TOKEN", "") or None,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.page_size not in PAGE_SIZE_OPTIONS:
            allowed = ", ".join(str(option) for option in PAGE_SIZE_OPTIONS)
            raise ValueError(f"HR_CONSOLE_PAGE_SIZE must be one of {allowed}")
        if self.cache_ttl_seconds <= 0:
            raise ValueError("HR_CONSOLE_CACHE_TTL_SECONDS must be greater than 0")
        if not self.export_dir:
            raise ValueError("HR_CONSOLE_EXPORT_DIR cannot be empty")
        if self.sdk.timeout_seconds <= 0:
            raise ValueError("HR_API_TIMEOUT_SECONDS must be greater than 0")
        if self.sdk.retry_max_attempts < 1:
            raise ValueError("HR_API_RETRY_MAX_ATTEMPTS must be at least 1")
        if self.sdk.retry_backoff_ms < 0:
            raise ValueError("HR_API_RETRY_BACKOFF_MS cannot be negative")


class _EnvReader:
    """Typed lookups over the merged variables; blank numbers and flags fall back to defaults."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = values

    def text(self, key: str, default: str) -> str:
        raw = self._values.get(key)
        return default if raw is None else raw.strip()

    def integer(self, key: str, default: int) -> int:
        raw = self.text(key, "")
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from exc

    def number(self, key: str, default: float) -> float:
        raw = self.text(key, "")
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a number, got {raw!r}") from exc

    def flag(self, key: str, default: bool) -> bool:
        return parse_bool(self._values.get(key), default=default)


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return default


def normalize_base_url(value: str) -> str:
    normalized = value.strip() or DEFAULT_BASE_URL
    return normalized if normalized.endswith("/") else f"{normalized}/"


def read_env_file(path: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines; comments, blank lines and an ``export`` prefix are tolerated."""
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return {}

    values: dict[str, str] = {}
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values
