# src/todo_sheets/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..sheets.importer import SheetImporter
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .pagination import Page, clamp_page, paginate
from .ports import ConfirmPrompt, FilePicker, TextPrompt


@dataclass
class ViewContext:
    """
    Per-session view state.

    Changing the page never touches the TaskStore.
    """

    page_size: int
    current_page: int = 1
    # Task whose edit prompt is currently open.
    pending_edit_id: int | None = None

    def go_to(self, page: int, total_items: int) -> int:
        self.current_page = clamp_page(page, total_items, self.page_size)
        return self.current_page

    def next(self, total_items: int) -> int:
        return self.go_to(self.current_page + 1, total_items)

    def prev(self, total_items: int) -> int:
        return self.go_to(self.current_page - 1, total_items)

    def reset(self) -> None:
        self.current_page = 1

    def page_of(self, tasks: list[Task]) -> Page[Task]:
        self.current_page = clamp_page(self.current_page, len(tasks), self.page_size)
        return paginate(tasks, self.current_page, self.page_size)


@dataclass
class AppState:
    # Settings object (config.Settings in the app, a namespace in tests).
    settings: object

    task_store: TaskStore
    importer: SheetImporter
    view: ViewContext

    confirm_prompt: ConfirmPrompt | None = None
    text_prompt: TextPrompt | None = None
    file_picker: FilePicker | None = None

    def current_page(self) -> Page[Task]:
        return self.view.page_of(self.task_store.list_tasks())
