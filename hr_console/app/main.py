from __future__ import annotations

import argparse
import sys

from hr_console.app.admin_console import AdminConsole, ConsoleOptions
from hr_console.app.config import AppConfig
from hr_console.app.error_presenter import show_error
from hr_console.app.infrastructure.logging.logger import get_logger, log_action
from hr_console.app.listing_cache import ListingCache
from hr_console.app.records_source import HrClients, RecordsSource
from hr_console.app.state import SessionState
from hr_console.app.ui.permission_map import DEFAULT_ROLE_PERMISSIONS
from hr_console.clients.hr_client_sdk.errors import ApiError
from hr_console.clients.hr_client_sdk.http_client import HttpClient

logger = get_logger(__name__)


def _print_runtime_config(config: AppConfig, role: str) -> None:
    print("HR Console")
    print(f"Base URL: {config.sdk.base_url}")
    print(f"Timeout: {config.sdk.timeout_seconds}s")
    print(f"GET Retry: {config.sdk.retry_max_attempts} attempts, base backoff {config.sdk.retry_backoff_ms}ms")
    print(f"Verify SSL: {config.sdk.verify_ssl}")
    print(f"Rows per page: {config.page_size}  Cache TTL: {config.cache_ttl_seconds}s")
    print(f"Role: {role}")


def build_session(role: str, access_token: str | None) -> SessionState:
    session = SessionState(access_token=access_token)
    session.apply_user({"role": role})
    return session


def _handle_http_auth_error(error: ApiError) -> None:
    show_error("Session check", error)
    log_action(logger, "session", "http_auth_error", None, "error", trace_id=error.trace_id, code=error.code)


def run_cli(env_file: str = ".env", role: str | None = None) -> int:
    try:
        config = AppConfig.from_env(env_file)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    resolved_role = (role or config.role).strip().lower()
    if resolved_role not in DEFAULT_ROLE_PERMISSIONS:
        print(f"Unknown role '{resolved_role}'", file=sys.stderr)
        return 1

    http_client = HttpClient(config=config.sdk)
    http_client.register_auth_error_handler(_handle_http_auth_error)
    source = RecordsSource(
        HrClients.from_http(http_client),
        cache=ListingCache(ttl_seconds=config.cache_ttl_seconds),
        access_token=config.access_token,
    )
    session = build_session(resolved_role, config.access_token)

    _print_runtime_config(config, resolved_role)
    log_action(logger, "session", "start", session.role, "success")
    try:
        AdminConsole(source, ConsoleOptions.from_config(config)).run(session)
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        http_client.close()
        log_action(logger, "session", "exit", session.role, "success")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Console for browsing and exporting HR records")
    parser.add_argument("--env-file", default=".env", help="Path of the .env file to load")
    parser.add_argument("--role", help="Role used for screen permissions (defaults to HR_CONSOLE_ROLE or admin)")
    args = parser.parse_args(argv)
    return run_cli(env_file=args.env_file, role=args.role)


if __name__ == "__main__":
    raise SystemExit(main())
