from __future__ import annotations

from datetime import date
from typing import Any


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "")}


def prompt_optional(label: str) -> str | None:
    value = input(f"{label} (optional): ").strip()
    return value or None


def parse_input_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def prompt_date(label: str, current: date) -> date:
    """Ask for an ISO date; blank or malformed input keeps ``current``."""
    raw = prompt_optional(f"{label} YYYY-MM-DD [{current.isoformat()}]")
    parsed = parse_input_date(raw)
    if raw and parsed is None:
        print(f"[validation] Invalid date '{raw}', keeping {current.isoformat()}.")
    return parsed or current


def prompt_department_id() -> int | None:
    raw = prompt_optional("Department id (blank = all departments)")
    return int(raw) if raw and raw.isdigit() else None
