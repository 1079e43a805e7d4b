from __future__ import annotations

from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from hr_console.app.export.errors import ExportError
from hr_console.app.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

MAX_COLUMN_WIDTH = 60


def export_xlsx(
    *,
    path: str | Path,
    sheet_title: str,
    headers: list[str],
    rows: list[list[Any]],
) -> Path:
    if not rows:
        raise ExportError("No data available for the selected period")

    workbook = Workbook()
    sheet = workbook.active
    # sheet titles are capped at 31 characters by the format
    sheet.title = sheet_title[:31]
    sheet.append(headers)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for row in rows:
        sheet.append(row)

    for column_cells in sheet.columns:
        longest = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column_cells)
        letter = get_column_letter(column_cells[0].column)
        sheet.column_dimensions[letter].width = min(longest + 2, MAX_COLUMN_WIDTH)

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(destination)
    logger.info("xlsx export written to %s (%d rows)", destination, len(rows))
    return destination
