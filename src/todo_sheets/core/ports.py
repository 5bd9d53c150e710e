# src/todo_sheets/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) for the collaborators around the core.

The core only issues calls through these Protocols; the console connector
provides the concrete implementations and tests provide fakes.
"""

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Task, TaskSummary
from .pagination import Page


class ConfirmPrompt(Protocol):
    """Asks the user a yes/no question (used before destructive bulk operations)."""

    def confirm(self, message: str) -> bool: ...


class TextPrompt(Protocol):
    """Asks the user for a line of text; None means the prompt was dismissed."""

    def ask(self, message: str, *, default: str = "") -> str | None: ...


class FilePicker(Protocol):
    """Produces a file to import; None means the dialog was dismissed."""

    def pick(self) -> Path | None: ...


class Renderer(Protocol):
    """
    Draws one page of tasks.

    Per-task controls follow the lock flag: edit and delete are disabled on
    locked tasks, status and lock toggles are always available.
    """

    def render(self, page: Page[Task], summary: TaskSummary) -> str: ...
