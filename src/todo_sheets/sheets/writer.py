# src/todo_sheets/sheets/writer.py

"""
Spreadsheet export.

Produces an .xlsx document with one sheet and two columns (Task, Completed).
Only text and done travel through the file; ids and lock state do not.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from ..tasks.task_models import Task
from .schema import HEADERS, NO, SHEET_NAME, YES

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ExportStyle:
    """Cosmetic layout of the exported sheet. Not needed to read the file back."""

    sheet_name: str = SHEET_NAME
    min_task_column_width: int = 10
    completed_column_width: int = 12
    header_font_color: str = "FFFFFF"
    header_fill_color: str = "228B22"
    header_font_size: int = 16
    freeze_header: bool = True

    @classmethod
    def from_settings(cls, settings) -> ExportStyle:
        return cls(
            sheet_name=getattr(settings, "sheet_name", SHEET_NAME),
            min_task_column_width=int(getattr(settings, "min_task_column_width", 10)),
            completed_column_width=int(getattr(settings, "completed_column_width", 12)),
            header_font_color=str(getattr(settings, "header_font_color", "FFFFFF")),
            header_fill_color=str(getattr(settings, "header_fill_color", "228B22")),
            header_font_size=int(getattr(settings, "header_font_size", 16)),
        )


def task_column_width(texts: Iterable[str], minimum: int) -> int:
    return max([len(t) for t in texts] + [minimum])


def sheet_text(text: str) -> str:
    """Drop control characters that the xlsx XML cannot hold."""
    return ILLEGAL_CHARACTERS_RE.sub("", text)


def build_workbook(tasks: Iterable[Task], style: ExportStyle | None = None) -> Workbook:
    style = style or ExportStyle()
    rows = [(sheet_text(t.text), YES if t.done else NO) for t in tasks]

    wb = Workbook()
    ws = wb.active
    ws.title = style.sheet_name

    ws.append(list(HEADERS))
    for row_idx, row in enumerate(rows, start=2):
        ws.append(list(row))
        # Task text is always a literal string, even when it starts with "=".
        ws.cell(row=row_idx, column=1).data_type = "s"

    header_font = Font(bold=True, color=style.header_font_color, size=style.header_font_size)
    header_fill = PatternFill(patternType="solid", fgColor=style.header_fill_color)
    for col in range(1, len(HEADERS) + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = header_font
        cell.fill = header_fill

    ws.column_dimensions[get_column_letter(1)].width = task_column_width(
        (text for text, _ in rows), style.min_task_column_width
    )
    ws.column_dimensions[get_column_letter(2)].width = style.completed_column_width

    if style.freeze_header:
        ws.freeze_panes = "A2"

    return wb


def export_tasks(tasks: Iterable[Task], style: ExportStyle | None = None) -> bytes:
    """Serialize tasks (in collection order) to .xlsx bytes."""
    tasks = list(tasks)
    wb = build_workbook(tasks, style)
    buf = io.BytesIO()
    wb.save(buf)
    data = buf.getvalue()
    logger.debug("Exported %d task(s) to %d bytes", len(tasks), len(data))
    return data
