# src/todo_sheets/sheets/importer.py

"""
Spreadsheet import boundary.

Reading the file is the only suspend point in the app. The importer:
- refuses a second import while one is pending (status BUSY, nothing happens),
- reads bytes off the event loop (asyncio.to_thread),
- parses fully before touching the store,
- merges into the store in one synchronous step.

A dismissed file picker (path is None) is a no-op (status CANCELLED).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .reader import read_tasks
from .schema import SheetImportError

logger = logging.getLogger(__name__)


class ImportStatus(StrEnum):
    IMPORTED = "imported"
    CANCELLED = "cancelled"
    BUSY = "busy"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class ImportOutcome:
    status: ImportStatus
    added: list[Task] = field(default_factory=list)
    rows_read: int = 0
    error: str | None = None

    @property
    def skipped(self) -> int:
        return self.rows_read - len(self.added)


class SheetImporter:
    def __init__(self, task_store: TaskStore) -> None:
        self._store = task_store
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def import_bytes(self, data: bytes, *, filename: str | None = None) -> ImportOutcome:
        """Parse then merge already-loaded bytes. The store is untouched on failure."""
        try:
            rows = read_tasks(data, filename)
        except SheetImportError as e:
            logger.warning("Import failed (%s): %s", filename or "<bytes>", e)
            return ImportOutcome(status=ImportStatus.FAILED, error=str(e))

        added = self._store.merge(rows)
        return ImportOutcome(status=ImportStatus.IMPORTED, added=added, rows_read=len(rows))

    async def import_path(self, path: str | Path | None) -> ImportOutcome:
        if path is None:
            logger.debug("Import cancelled (no file selected)")
            return ImportOutcome(status=ImportStatus.CANCELLED)

        if self._pending:
            logger.info("Import of %s ignored: another import is still pending", path)
            return ImportOutcome(status=ImportStatus.BUSY, error="Another import is in progress.")

        path = Path(path)
        self._pending = True
        try:
            try:
                data = await asyncio.to_thread(path.read_bytes)
            except OSError as e:
                logger.warning("Import failed: cannot read %s: %s", path, e)
                return ImportOutcome(status=ImportStatus.FAILED, error=f"Cannot read file: {e}")

            outcome = self.import_bytes(data, filename=path.name)
        finally:
            self._pending = False

        if outcome.status == ImportStatus.IMPORTED:
            logger.info(
                "Imported %s: %d added, %d skipped", path, len(outcome.added), outcome.skipped
            )
        return outcome
