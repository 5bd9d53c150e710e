# src/todo_sheets/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..sheets.importer import ImportStatus
from ..tasks.task_api import clear_unlocked_confirmed, export_to_path
from ..tasks.task_models import Rejection

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry: every user action is one command dispatched to the store."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw_args: bool = False,
    ) -> None:
        """
        raw_args=True hands the handler the rest of the line as a single argument
        (inner whitespace kept), for free text and file paths.
        """
        aliases = aliases or []
        key = name.lower()
        names = [key, *(alias.lower() for alias in aliases)]
        for n in names:
            self._handlers[n] = handler
            if raw_args:
                self._raw.add(n)
        self._help[key] = help_text

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(None, 1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

_REJECTION_TEXT = {
    Rejection.EMPTY: "Task text cannot be empty.",
    Rejection.DUPLICATE: "A task with that text already exists.",
    Rejection.LOCKED: "Task {id} is locked. Unlock it first.",
    Rejection.NOT_FOUND: "No task with id {id}.",
}


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    raw = args[0].lstrip("#").rstrip(".")
    return int(raw) if raw.isdigit() else None


# ---- single-task commands ----


def add_text(state: AppState, text: str) -> str:
    """Shared by /add and plain (non-command) console input."""
    task = state.task_store.add(text)
    if task is None:
        rejection = state.task_store.check_text(text) or Rejection.DUPLICATE
        return _REJECTION_TEXT[rejection]
    return f"Added task {task.id}: {task.text}"


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /add <text>"
    return add_text(state, args[0])


def _set_status(state: AppState, args: list[str], done: bool) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return f"Usage: /{'done' if done else 'undone'} <id>"
    if not state.task_store.set_status(task_id, done):
        return _REJECTION_TEXT[Rejection.NOT_FOUND].format(id=task_id)
    return f"Task {task_id} marked {'completed' if done else 'not completed'}."


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_status(state, args, True)


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_status(state, args, False)


def cmd_remove(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    task = state.task_store.get(task_id)
    if task is None:
        return _REJECTION_TEXT[Rejection.NOT_FOUND].format(id=task_id)
    if task.locked:
        return _REJECTION_TEXT[Rejection.LOCKED].format(id=task_id)
    state.task_store.remove(task_id)
    return f"Removed task {task_id}."


def cmd_lock(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /lock <id>"
    if not state.task_store.toggle_lock(task_id):
        return _REJECTION_TEXT[Rejection.NOT_FOUND].format(id=task_id)
    task = state.task_store.get(task_id)
    return f"Task {task_id} {'locked' if task and task.locked else 'unlocked'}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id>  -> prompt for new text (the current text is the default)

    Locked tasks are refused before the prompt opens.
    """
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    task = state.task_store.get(task_id)
    if task is None:
        return _REJECTION_TEXT[Rejection.NOT_FOUND].format(id=task_id)
    if task.locked:
        return _REJECTION_TEXT[Rejection.LOCKED].format(id=task_id)
    if state.text_prompt is None:
        return "Editing is not available here."

    state.view.pending_edit_id = task_id
    try:
        new_text = state.text_prompt.ask(f"Edit task {task_id}", default=task.text)
        if new_text is None:
            return "Edit cancelled."
        if not state.task_store.edit(task_id, new_text):
            rejection = state.task_store.check_text(new_text, exclude_id=task_id) or Rejection.LOCKED
            return _REJECTION_TEXT[rejection].format(id=task_id)
    finally:
        state.view.pending_edit_id = None
    return f"Task {task_id} updated."


# ---- bulk commands ----


def cmd_complete_all(state: AppState, args: list[str]) -> str:
    summary = state.task_store.summary()
    if summary.total == 0:
        return "No tasks."
    if summary.all_done:
        return "Nothing to change: all tasks are already completed."
    state.task_store.complete_all(True)
    return f"Marked {summary.total} task(s) completed."


def cmd_incomplete_all(state: AppState, args: list[str]) -> str:
    summary = state.task_store.summary()
    if summary.total == 0:
        return "No tasks."
    if summary.none_done:
        return "Nothing to change: no task is completed."
    state.task_store.complete_all(False)
    return f"Marked {summary.total} task(s) not completed."


def cmd_lock_all(state: AppState, args: list[str]) -> str:
    summary = state.task_store.summary()
    if summary.total == 0:
        return "No tasks."
    if summary.all_locked:
        return "Nothing to change: all tasks are already locked."
    state.task_store.lock_all(True)
    return f"Locked {summary.total} task(s)."


def cmd_unlock_all(state: AppState, args: list[str]) -> str:
    summary = state.task_store.summary()
    if summary.total == 0:
        return "No tasks."
    if summary.none_locked:
        return "Nothing to change: no task is locked."
    state.task_store.lock_all(False)
    return f"Unlocked {summary.total} task(s)."


def cmd_clear(state: AppState, args: list[str]) -> str:
    if state.task_store.count_tasks() == 0:
        return "Nothing to clear."
    removed = clear_unlocked_confirmed(state)
    if removed is None:
        return "Clear cancelled."
    return f"Removed {removed} unlocked task(s); {state.task_store.count_tasks()} locked task(s) kept."


# ---- spreadsheet commands ----


def cmd_export(state: AppState, args: list[str]) -> str:
    if state.task_store.count_tasks() == 0:
        return "Nothing to export."
    target = args[0] if args else None
    try:
        path = export_to_path(state, target)
    except (OSError, ValueError) as e:
        logger.warning("Export failed: %s", e)
        return f"Export failed: {e}"
    return f"Exported {state.task_store.count_tasks()} task(s) to {path}"


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /import <path>  -> merge tasks from an .xlsx/.xls file
    /import         -> ask for the file via the file picker

    Rows whose text already exists (ignoring case and surrounding spaces) are skipped.
    """
    path: str | Path | None
    if args:
        path = args[0]
    elif state.file_picker is not None:
        path = state.file_picker.pick()
    else:
        return "Usage: /import <path to .xlsx or .xls>"

    if path is not None and emit:
        with contextlib.suppress(Exception):
            emit(f"Reading {path}...")

    outcome = asyncio.run(state.importer.import_path(path))

    if outcome.status == ImportStatus.BUSY:
        return "Another import is still running."
    if outcome.status == ImportStatus.FAILED:
        return f"Import failed, no tasks added: {outcome.error}"
    if outcome.status == ImportStatus.CANCELLED:
        return "Import cancelled."
    return f"Imported {len(outcome.added)} new task(s); {outcome.skipped} duplicate(s) skipped."


# ---- view commands ----


def cmd_page(state: AppState, args: list[str]) -> str:
    if len(args) != 1 or not args[0].isdigit():
        return "Usage: /page <n>"
    n = state.view.go_to(int(args[0]), state.task_store.count_tasks())
    return f"Page {n}."


def cmd_next(state: AppState, args: list[str]) -> str:
    return f"Page {state.view.next(state.task_store.count_tasks())}."


def cmd_prev(state: AppState, args: list[str]) -> str:
    return f"Page {state.view.prev(state.task_store.count_tasks())}."


def cmd_list(state: AppState, args: list[str]) -> str:
    page = state.current_page()
    return f"Page {page.number}/{page.total_pages}."


def cmd_status(state: AppState, args: list[str]) -> str:
    summary = state.task_store.summary()
    page = state.current_page()
    return (
        "Status:\n"
        f"  Tasks: {summary.total} ({summary.done} completed, {summary.locked} locked)\n"
        f"  Page: {page.number}/{page.total_pages} ({page.page_size} per page)"
    )


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> (plain text also adds).", raw_args=True)
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undone", cmd_undone, help_text="Mark a task not completed: /undone <id>.")
registry.register("rm", cmd_remove, help_text="Delete an unlocked task: /rm <id>.", aliases=["remove", "del"])
registry.register("lock", cmd_lock, help_text="Lock/unlock a task: /lock <id>.", aliases=["unlock"])
registry.register("edit", cmd_edit, help_text="Edit an unlocked task's text: /edit <id>.")
registry.register("complete-all", cmd_complete_all, help_text="Mark every task completed.")
registry.register("incomplete-all", cmd_incomplete_all, help_text="Mark every task not completed.")
registry.register("lock-all", cmd_lock_all, help_text="Lock every task.")
registry.register("unlock-all", cmd_unlock_all, help_text="Unlock every task.")
registry.register("clear", cmd_clear, help_text="Remove all unlocked tasks (asks first).")
registry.register("export", cmd_export, help_text="Export to .xlsx: /export [path].", raw_args=True)
registry.register("import", cmd_import, help_text="Import from .xlsx/.xls: /import <path>.", raw_args=True)
registry.register("page", cmd_page, help_text="Go to page: /page <n>.")
registry.register("next", cmd_next, help_text="Next page.", aliases=["n"])
registry.register("prev", cmd_prev, help_text="Previous page.", aliases=["p"])
registry.register("list", cmd_list, help_text="Redraw the current page.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show task counts and current page.")
