from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from hr_console.app.export.errors import ExportError
from hr_console.app.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

HEADER_FILL = colors.Color(71 / 255, 85 / 255, 105 / 255)


def format_period(start: date, end: date) -> str:
    return f"Period: {start.strftime('%b %d, %Y')} - {end.strftime('%b %d, %Y')}"


def export_pdf(
    *,
    path: str | Path,
    title: str,
    start: date,
    end: date,
    headers: list[str],
    rows: list[list[Any]],
) -> Path:
    if not rows:
        raise ExportError("No data available for the selected period")

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    doc = SimpleDocTemplate(str(destination), pagesize=A4, rightMargin=36, leftMargin=36, topMargin=36, bottomMargin=36)
    styles = getSampleStyleSheet()

    story = [
        Paragraph(title, styles["Title"]),
        Paragraph(format_period(start, end), styles["Normal"]),
        Spacer(1, 12),
    ]
    data = [headers] + [["" if value is None else str(value) for value in row] for row in rows]
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    story.append(table)
    doc.build(story)
    logger.info("pdf export written to %s (%d rows)", destination, len(rows))
    return destination
