# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_sheets.cli.bootstrap import create_initial_state
from todo_sheets.core.state import AppState
from todo_sheets.tasks.task_store import TaskStore

from .fakes import FakeConfirmPrompt, FakeFilePicker, FakeTextPrompt


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="todo-sheets-test",
        data_dir=tmp_path / "data",
        export_dir=tmp_path / "exports",
        export_filename="TodoList.xlsx",
        page_size=2,
        sheet_name="Tasks",
        min_task_column_width=10,
        completed_column_width=12,
        header_font_color="FFFFFF",
        header_fill_color="228B22",
        header_font_size=16,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired with fake boundary prompts (confirm: yes)."""
    st = create_initial_state(settings=settings)
    st.confirm_prompt = FakeConfirmPrompt(answer=True)
    st.text_prompt = FakeTextPrompt()
    st.file_picker = FakeFilePicker()
    return st
