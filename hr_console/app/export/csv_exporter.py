from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from hr_console.app.infrastructure.logging.logger import get_logger
from hr_console.app.ui.listing_view import ColumnDef, sanitize_row

logger = get_logger(__name__)


def view_rows(columns: Sequence[ColumnDef], records: Iterable[Any]) -> list[dict[str, str]]:
    return [{column.label: column.text(record) for column in columns} for record in records]


def export_current_view(
    *,
    module: str,
    rows: list[dict[str, Any]],
    headers: list[str],
    output_dir: str = "out/exports",
    filters: dict[str, str] | None = None,
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)

    now = datetime.now().astimezone()
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    path = destination / f"{module}_{timestamp}.csv"

    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.write(f"# timestamp_local: {now.isoformat()}\n")
        handle.write(f"# module: {module}\n")
        handle.write(f"# filters: {filters or {}}\n")
        writer = csv.DictWriter(handle, fieldnames=headers, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(sanitize_row(row, headers=headers))

    logger.info("csv export written to %s (%d rows)", path, len(rows))
    return path
