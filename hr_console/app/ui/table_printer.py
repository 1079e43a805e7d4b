from __future__ import annotations

from dataclasses import replace
from typing import Any

from hr_console.app.ui.data_table import DataTable, SortDirection
from hr_console.app.ui.listing_view import ColumnDef, EMPTY_VALUE


def _cell(column: ColumnDef, row: Any) -> str:
    return column.text(row) or EMPTY_VALUE


def print_table(title: str, rows: list[Any], columns: list[ColumnDef]) -> None:
    print(f"\n{title}")
    if not rows:
        print("No results found.")
        return

    widths = []
    for column in columns:
        max_cell = max(len(_cell(column, row)) for row in rows)
        widths.append(max(len(column.label), max_cell))

    header_line = " | ".join(column.label.ljust(widths[idx]) for idx, column in enumerate(columns))
    separator = "-+-".join("-" * width for width in widths)
    print(header_line)
    print(separator)

    for row in rows:
        line = " | ".join(_cell(column, row).ljust(widths[idx]) for idx, column in enumerate(columns))
        print(line)


def print_data_table(title: str, table: DataTable) -> None:
    columns = table.columns
    if table.sorting:
        entry = table.sorting[0]
        arrow = "^" if entry.direction is SortDirection.ASC else "v"
        columns = [
            replace(column, label=f"{column.label} {arrow}") if column.key == entry.key else column
            for column in columns
        ]
    print_table(title, table.visible_rows(), columns)
    print(
        f"Rows per page: {table.page_size}  "
        f"Page {table.current_page() + 1} of {table.page_count()}  "
        f"({table.total_rows()} matching)"
    )
