# src/todo_sheets/sheets/reader.py

"""
Spreadsheet import (parse stage only).

Reads the first sheet of an .xlsx (openpyxl) or legacy .xls (xlrd) document
and returns ImportedTask rows. This module never touches the TaskStore: the
caller merges the result only after parsing succeeded, so a bad file cannot
leave a half-applied import behind.

Schema:
- the first row is the header; it must contain a "Task" cell (exact, case-sensitive)
- "Completed" is optional; a row is done iff its cell is exactly "Yes"
- rows whose Task cell is not a non-blank string are skipped
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Sequence
from pathlib import PurePath
from typing import Any

import xlrd
from openpyxl import load_workbook

from ..tasks.task_models import ImportedTask
from .schema import (
    ACCEPTED_EXTENSIONS,
    COMPLETED_HEADER,
    OLE_MAGIC,
    TASK_HEADER,
    XLS_EXTENSION,
    XLSX_EXTENSION,
    YES,
    ZIP_MAGIC,
    SheetImportError,
)

logger = logging.getLogger(__name__)


def detect_format(data: bytes, filename: str | None = None) -> str:
    """
    Return ".xlsx" or ".xls"; raise SheetImportError for anything else.

    The filename extension gates what is accepted; the leading bytes decide
    which parser runs (files saved as .xls are often really .xlsx).
    """
    ext: str | None = None
    if filename:
        ext = PurePath(filename).suffix.lower()
        if ext not in ACCEPTED_EXTENSIONS:
            raise SheetImportError(
                f"Unsupported file type {ext or '(none)'!r}; expected one of {', '.join(ACCEPTED_EXTENSIONS)}"
            )

    if data.startswith(ZIP_MAGIC):
        return XLSX_EXTENSION
    if data.startswith(OLE_MAGIC):
        return XLS_EXTENSION
    if ext is not None:
        return ext
    raise SheetImportError("Not a spreadsheet document")


def _xlsx_rows(data: bytes) -> list[tuple[Any, ...]]:
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        raise SheetImportError(f"Cannot open .xlsx document: {e}") from e
    try:
        if not wb.worksheets:
            raise SheetImportError("Workbook has no sheets")
        ws = wb.worksheets[0]
        return [tuple(row) for row in ws.iter_rows(values_only=True)]
    except SheetImportError:
        raise
    except Exception as e:
        raise SheetImportError(f"Cannot read .xlsx document: {e}") from e
    finally:
        wb.close()


def _xls_rows(data: bytes) -> list[tuple[Any, ...]]:
    try:
        book = xlrd.open_workbook(file_contents=data, on_demand=True)
    except Exception as e:
        raise SheetImportError(f"Cannot open .xls document: {e}") from e
    try:
        if book.nsheets < 1:
            raise SheetImportError("Workbook has no sheets")
        sheet = book.sheet_by_index(0)
        return [tuple(sheet.row_values(i)) for i in range(sheet.nrows)]
    except SheetImportError:
        raise
    except Exception as e:
        raise SheetImportError(f"Cannot read .xls document: {e}") from e
    finally:
        book.release_resources()


def _header_index(header: Sequence[Any], name: str) -> int | None:
    for i, value in enumerate(header):
        if isinstance(value, str) and value == name:
            return i
    return None


def _cell(row: Sequence[Any], index: int | None) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def rows_to_tasks(rows: Iterable[Sequence[Any]]) -> list[ImportedTask]:
    """Apply the Task/Completed schema to raw sheet rows (header first)."""
    it = iter(rows)
    header = next(it, None)
    if header is None:
        # An empty sheet is not malformed; there is just nothing to import.
        return []

    task_idx = _header_index(header, TASK_HEADER)
    if task_idx is None:
        raise SheetImportError(f"Missing {TASK_HEADER!r} column in header row")
    done_idx = _header_index(header, COMPLETED_HEADER)

    out: list[ImportedTask] = []
    skipped = 0
    for row in it:
        raw_text = _cell(row, task_idx)
        if not isinstance(raw_text, str) or not raw_text.strip():
            skipped += 1
            continue
        completed = _cell(row, done_idx)
        out.append(ImportedTask(text=raw_text.strip(), done=isinstance(completed, str) and completed == YES))

    if skipped:
        logger.debug("Skipped %d row(s) without a usable %s cell", skipped, TASK_HEADER)
    return out


def read_tasks(data: bytes, filename: str | None = None) -> list[ImportedTask]:
    """
    Parse a spreadsheet document into rows ready for TaskStore.merge().

    Raises SheetImportError if the document is unreadable or fails the schema.
    """
    if not data:
        raise SheetImportError("Empty document")

    fmt = detect_format(data, filename)
    raw_rows = _xlsx_rows(data) if fmt == XLSX_EXTENSION else _xls_rows(data)
    tasks = rows_to_tasks(raw_rows)
    logger.debug("Parsed %s document: %d row(s), %d task(s)", fmt, len(raw_rows), len(tasks))
    return tasks
