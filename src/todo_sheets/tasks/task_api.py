# src/todo_sheets/tasks/task_api.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..core.state import AppState
from ..sheets.writer import ExportStyle, export_tasks

logger = logging.getLogger(__name__)

CLEAR_CONFIRM_MESSAGE = "Remove all unlocked tasks? This can't be undone."


def clear_unlocked_confirmed(state: AppState) -> int | None:
    """
    Ask for confirmation, then remove every unlocked task and go back to page 1.

    Returns the number of removed tasks, or None if the user declined or no
    confirmation surface is wired (never clears without asking).
    """
    prompt = state.confirm_prompt
    if prompt is None:
        logger.warning("clear_unlocked requested without a confirmation prompt; ignoring")
        return None
    if not prompt.confirm(CLEAR_CONFIRM_MESSAGE):
        logger.debug("clear_unlocked declined by user")
        return None

    removed = state.task_store.clear_unlocked()
    state.view.reset()
    return removed


def default_export_path(state: AppState) -> Path:
    settings = state.settings
    export_dir = Path(getattr(settings, "export_dir", None) or getattr(settings, "data_dir", "."))
    return export_dir / str(getattr(settings, "export_filename", "TodoList.xlsx"))


def export_to_path(state: AppState, path: str | Path | None = None) -> Path:
    """
    Write the whole collection to an .xlsx file and return its path.

    The file is written to a temp name first and moved into place, so a
    failed export never leaves a truncated workbook behind.
    """
    target = Path(path) if path else default_export_path(state)
    if target.suffix.lower() != ".xlsx":
        target = target.with_name(target.name + ".xlsx")

    data = export_tasks(state.task_store.list_tasks(), ExportStyle.from_settings(state.settings))

    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, target)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    logger.info("Exported %d task(s) to %s", state.task_store.count_tasks(), target)
    return target

