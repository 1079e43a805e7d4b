from __future__ import annotations

import re
from typing import Any

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_snake_case(str(key)): snake_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [snake_keys(item) for item in value]
    return value


def normalize_records(payload: Any) -> list[dict[str, Any]]:
    rows: Any = []
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in ("rows", "items", "data"):
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break

    return [snake_keys(row) for row in rows if isinstance(row, dict)]


def normalize_record(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    return snake_keys(payload)
