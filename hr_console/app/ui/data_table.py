"""In-memory table engine shared by every listing screen.

The table owns sort, filter and pagination state for one listing. Records
are supplied by the caller (usually fresh from :class:`RecordsSource`) and
are never mutated; every derived view is recomputed from the current
records on each call.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from hr_console.app.ui.listing_view import ColumnDef, ListingViewState, display_text
from hr_console.app.ui.pagination import (
    DEFAULT_PAGE_SIZE,
    PaginationState,
    clamp_page,
    next_page,
    page_count_for,
    prev_page,
    resize_page,
    snap_page_size,
)
from hr_console.app.ui.search import DEFAULT_LOOKUP_KEY, build_lookup_index, contains, matches_global_filter


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortEntry:
    key: str
    direction: SortDirection


class DataTable:
    def __init__(
        self,
        records: Iterable[Any],
        columns: Sequence[ColumnDef],
        *,
        search_column: str | None = None,
        global_filter: bool = False,
        lookup: Iterable[Any] | None = None,
        lookup_key: str = DEFAULT_LOOKUP_KEY,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._columns: dict[str, ColumnDef] = _index_columns(columns)
        self._records: list[Any] = list(records)
        self._lookup: list[Any] = list(lookup or [])
        self.lookup_key = lookup_key
        self.search_column = search_column
        self.global_filter_mode = global_filter
        self._sorting: list[SortEntry] = []
        self._column_filters: dict[str, str] = {}
        self._global_filter = ""
        self._pagination = PaginationState(page_index=0, page_size=snap_page_size(page_size))

    @property
    def columns(self) -> list[ColumnDef]:
        return list(self._columns.values())

    @property
    def sorting(self) -> tuple[SortEntry, ...]:
        return tuple(self._sorting)

    @property
    def column_filters(self) -> dict[str, str]:
        return dict(self._column_filters)

    @property
    def global_filter(self) -> str:
        return self._global_filter

    @property
    def page_size(self) -> int:
        return self._pagination.page_size

    @property
    def search_value(self) -> str:
        if self.global_filter_mode:
            return self._global_filter
        if self.search_column:
            return self._column_filters.get(self.search_column, "")
        return ""

    def set_records(self, records: Iterable[Any], lookup: Iterable[Any] | None = None) -> None:
        self._records = list(records)
        if lookup is not None:
            self._lookup = list(lookup)
        clamp_page(self._pagination, self.page_count())

    def set_columns(self, columns: Sequence[ColumnDef]) -> None:
        """Swap column definitions; filters and sort on dropped keys are discarded."""
        self._columns = _index_columns(columns)
        self._column_filters = {key: text for key, text in self._column_filters.items() if key in self._columns}
        self._sorting = [entry for entry in self._sorting if entry.key in self._columns]
        clamp_page(self._pagination, self.page_count())

    # filtering

    def set_global_filter(self, text: str | None) -> None:
        self._global_filter = text or ""
        self._reset_page_if_out_of_range()

    def set_column_filter(self, key: str, text: str | None) -> None:
        if key not in self._columns:
            return
        if text:
            self._column_filters[key] = text
        else:
            self._column_filters.pop(key, None)
        self._reset_page_if_out_of_range()

    def search(self, text: str | None) -> None:
        if self.global_filter_mode:
            self.set_global_filter(text)
        elif self.search_column:
            self.set_column_filter(self.search_column, text)

    def clear_filters(self) -> None:
        self._global_filter = ""
        self._column_filters.clear()

    # sorting

    def toggle_sort(self, key: str) -> None:
        column = self._columns.get(key)
        if column is None or not column.sortable:
            return
        current = self._sorting[0] if self._sorting and self._sorting[0].key == key else None
        if current is None:
            self._sorting = [SortEntry(key, SortDirection.ASC)]
        elif current.direction is SortDirection.ASC:
            self._sorting = [SortEntry(key, SortDirection.DESC)]
        else:
            self._sorting = []

    def set_sort(self, key: str | None, direction: SortDirection | str | None = SortDirection.ASC) -> None:
        if key is None or direction is None:
            self._sorting = []
            return
        column = self._columns.get(key)
        resolved = _sort_direction(direction)
        if column is None or not column.sortable or resolved is None:
            return
        self._sorting = [SortEntry(key, resolved)]

    # pagination

    def set_page_size(self, page_size: int) -> None:
        self._pagination.page_index = self.current_page()
        resize_page(self._pagination, page_size)
        clamp_page(self._pagination, self.page_count())

    def next_page(self) -> None:
        self._pagination.page_index = self.current_page()
        next_page(self._pagination, self.page_count())

    def previous_page(self) -> None:
        self._pagination.page_index = self.current_page()
        prev_page(self._pagination)

    def can_next_page(self) -> bool:
        return self.current_page() < self.page_count() - 1

    def can_previous_page(self) -> bool:
        return self.current_page() > 0

    def page_count(self) -> int:
        return page_count_for(len(self.filtered_rows()), self._pagination.page_size)

    def current_page(self) -> int:
        return min(self._pagination.page_index, self.page_count() - 1)

    # derived views

    def filtered_rows(self) -> list[Any]:
        rows = list(self._records)
        if self._global_filter:
            lookup_index = build_lookup_index(self._lookup)
            rows = [
                row
                for row in rows
                if matches_global_filter(row, self._global_filter, lookup_index, self.lookup_key)
            ]
        for key, text in self._column_filters.items():
            column = self._columns[key]
            rows = [row for row in rows if contains(column.text(row), text)]
        return rows

    def sorted_rows(self) -> list[Any]:
        rows = self.filtered_rows()
        if not self._sorting:
            return rows
        entry = self._sorting[0]
        return sort_records(rows, self._columns[entry.key], descending=entry.direction is SortDirection.DESC)

    def visible_rows(self) -> list[Any]:
        rows = self.sorted_rows()
        size = self._pagination.page_size
        start = self.current_page() * size
        return rows[start : start + size]

    def total_rows(self) -> int:
        return len(self.filtered_rows())

    # view state snapshots

    def view_state(self) -> ListingViewState:
        entry = self._sorting[0] if self._sorting else None
        return ListingViewState(
            sort_by=entry.key if entry else None,
            sort_dir=entry.direction.value if entry else "asc",
            page_size=self._pagination.page_size,
        )

    def apply_view_state(self, view: ListingViewState) -> None:
        if view.sort_by:
            self.set_sort(view.sort_by, view.sort_dir)
        else:
            self._sorting = []
        if view.page_size:
            self.set_page_size(view.page_size)

    def _reset_page_if_out_of_range(self) -> None:
        if self._pagination.page_index > self.page_count() - 1:
            self._pagination.page_index = 0


def _index_columns(columns: Sequence[ColumnDef]) -> dict[str, ColumnDef]:
    keys = [column.key for column in columns]
    duplicated = sorted({key for key in keys if keys.count(key) > 1})
    if duplicated:
        raise ValueError(f"Duplicated column keys: {', '.join(duplicated)}")
    return {column.key: column for column in columns}


def _sort_direction(direction: SortDirection | str) -> SortDirection | None:
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SortDirection(str(direction).strip().lower())
    except ValueError:
        return None


def sort_records(rows: list[Any], column: ColumnDef, descending: bool = False) -> list[Any]:
    """Stable sort on one column; empty values trail in both directions."""
    present = [row for row in rows if not _is_empty(column.value(row))]
    empty = [row for row in rows if _is_empty(column.value(row))]
    ordered = sorted(present, key=lambda row: _sort_key(column.value(row)), reverse=descending)
    return ordered + empty


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _sort_key(value: Any) -> tuple[int, float, str]:
    if isinstance(value, (int, float)):
        return (0, float(value), "")
    if isinstance(value, (datetime, date, time)):
        return (1, 0.0, value.isoformat())
    return (2, 0.0, display_text(value).lower())
