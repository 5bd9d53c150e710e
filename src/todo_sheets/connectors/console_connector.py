# src/todo_sheets/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from ..cli.commands import add_text
from ..cli.commands import registry as command_registry
from ..core.pagination import Page
from ..core.ports import Renderer
from ..core.state import AppState
from ..tasks.task_models import Task, TaskSummary

logger = logging.getLogger(__name__)

TEXT_COL_MIN = 20


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleConfirmPrompt:
    def confirm(self, message: str) -> bool:
        try:
            answer = input(f"{message} [y/N]: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer in ("y", "yes")


class ConsoleTextPrompt:
    def ask(self, message: str, *, default: str = "") -> str | None:
        hint = f" [{default}]" if default else ""
        try:
            raw = input(f"{message}{hint} (empty line cancels): ")
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        if not raw.strip():
            return None
        return raw


class ConsoleFilePicker:
    def pick(self) -> Path | None:
        try:
            raw = input("Path to .xlsx/.xls file (empty line cancels): ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        return Path(raw).expanduser() if raw else None


class ConsoleRenderer:
    """
    Plain-text table of one page.

    Columns: id, task, status, and the controls available for that row.
    Locked rows do not offer edit/delete.
    """

    def render(self, page: Page[Task], summary: TaskSummary) -> str:
        if summary.total == 0:
            return "No tasks yet. Type a task to add it, or /import <file>."

        width = max([TEXT_COL_MIN] + [len(t.text) for t in page.items])
        id_width = max([2] + [len(str(t.id)) for t in page.items])
        lines = [f"{'ID'.rjust(id_width)}  {'Task'.ljust(width)}  {'Status':<13}  Actions"]
        lines.append("-" * len(lines[0]))
        for t in page.items:
            status = "Completed" if t.done else "Not Completed"
            actions = ["done" if not t.done else "undone"]
            if not t.locked:
                actions += ["edit", "rm"]
            actions.append("unlock" if t.locked else "lock")
            lock_mark = " [locked]" if t.locked else ""
            lines.append(
                f"{str(t.id).rjust(id_width)}  {t.text.ljust(width)}  {status:<13}  {' '.join(actions)}{lock_mark}"
            )

        nav = f"Page {page.number}/{page.total_pages}"
        if page.has_prev:
            nav = "/prev < " + nav
        if page.has_next:
            nav = nav + " > /next"
        lines.append("")
        lines.append(nav)
        lines.append(
            f"{summary.total} task(s), {summary.done} completed, {summary.locked} locked"
        )
        return "\n".join(lines)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (page_size=%s).", state.view.page_size)
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    if state.confirm_prompt is None:
        state.confirm_prompt = ConsoleConfirmPrompt()
    if state.text_prompt is None:
        state.text_prompt = ConsoleTextPrompt()
    if state.file_picker is None:
        state.file_picker = ConsoleFilePicker()
    renderer: Renderer = ConsoleRenderer()

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    print(renderer.render(state.current_page(), state.task_store.summary()))

    while True:
        try:
            user_input = input("\n>>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
            if response is None:
                response = add_text(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        _print_ts(response)
        print()
        print(renderer.render(state.current_page(), state.task_store.summary()))

    logger.info("Console connector finished.")
