# src/todo_sheets/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store, importer and view context into AppState.

Boundary prompts (confirm / edit) are attached later by the connector.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState, ViewContext
from ..sheets.importer import SheetImporter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    export_dir = getattr(settings, "export_dir", None)
    if export_dir:
        Path(export_dir).mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore()
    state = AppState(
        settings=settings,
        task_store=task_store,
        importer=SheetImporter(task_store),
        view=ViewContext(page_size=max(1, int(getattr(settings, "page_size", 6)))),
    )
    logger.debug("State created (page_size=%s)", state.view.page_size)
    return state
