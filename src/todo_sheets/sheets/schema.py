# src/todo_sheets/sheets/schema.py

"""Spreadsheet layout shared by the writer and the reader."""

from __future__ import annotations

SHEET_NAME = "Tasks"

TASK_HEADER = "Task"
COMPLETED_HEADER = "Completed"
HEADERS = (TASK_HEADER, COMPLETED_HEADER)

# Case-sensitive: anything other than exactly "Yes" reads back as not completed.
YES = "Yes"
NO = "No"

XLSX_EXTENSION = ".xlsx"
XLS_EXTENSION = ".xls"
ACCEPTED_EXTENSIONS = (XLSX_EXTENSION, XLS_EXTENSION)

# Leading bytes used when no filename is available.
ZIP_MAGIC = b"PK\x03\x04"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class SheetImportError(Exception):
    """The document could not be read as a task sheet. Nothing was imported."""
