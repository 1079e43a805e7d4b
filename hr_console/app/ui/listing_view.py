from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

EMPTY_VALUE = "—"
SENSITIVE_KEYS = {"token", "refresh_token", "secret", "password", "access_token"}


def read_field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    accessor: Callable[[Any], Any] | None = None
    render: Callable[[Any], str | None] | None = None
    sortable: bool = True

    def value(self, record: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(record)
        return read_field(record, self.key)

    def text(self, record: Any) -> str:
        """Rendered cell text; absent values render as an empty string."""
        value = self.value(record)
        if self.render is not None:
            return self.render(value) or ""
        return display_text(value)


@dataclass
class ListingViewState:
    sort_by: str | None = None
    sort_dir: str = "asc"
    page_size: int | None = None


def hydrate_view_state(payload: dict[str, Any] | None, columns: list[ColumnDef]) -> ListingViewState:
    allowed = {column.key for column in columns if column.sortable}
    if not isinstance(payload, dict):
        return ListingViewState()

    sort_by = payload.get("sort_by")
    resolved_sort = str(sort_by) if sort_by in allowed else None
    sort_dir = "desc" if str(payload.get("sort_dir", "asc")).lower() == "desc" else "asc"
    page_size = payload.get("page_size")
    resolved_page_size = int(page_size) if isinstance(page_size, int) and page_size > 0 else None
    return ListingViewState(sort_by=resolved_sort, sort_dir=sort_dir, page_size=resolved_page_size)


def serialize_view_state(view: ListingViewState) -> dict[str, Any]:
    return {"sort_by": view.sort_by, "sort_dir": view.sort_dir, "page_size": view.page_size}


def display_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "Active" if value else "Inactive"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def normalize_value(value: Any) -> str:
    text = display_text(value)
    return text if text else EMPTY_VALUE


def sanitize_row(row: dict[str, Any], headers: list[str]) -> dict[str, str]:
    sanitized: dict[str, str] = {}
    for header in headers:
        if any(token in header.lower() for token in SENSITIVE_KEYS):
            sanitized[header] = EMPTY_VALUE
            continue
        sanitized[header] = normalize_value(row.get(header))
    return sanitized
