# src/todo_sheets/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


def comparison_key(text: str) -> str:
    """Uniqueness key for task text: trimmed and case-folded with lower()."""
    return text.strip().lower()


class Rejection(StrEnum):
    """
    Why a store operation changed nothing.

    None of these are errors: the store returns None/False and the caller
    decides whether to tell the user.
    """

    EMPTY = "empty"
    DUPLICATE = "duplicate"
    LOCKED = "locked"
    NOT_FOUND = "not_found"


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single task.

    Instances are immutable snapshots; TaskStore swaps in a new instance
    (dataclasses.replace) on every change, so holding a Task never lets a
    caller bypass the store's invariants.
    """

    id: int
    text: str
    done: bool = False
    locked: bool = False

    @property
    def key(self) -> str:
        return comparison_key(self.text)


@dataclass(slots=True, frozen=True)
class ImportedTask:
    """One row read from a spreadsheet, before merge."""

    text: str
    done: bool = False


@dataclass(slots=True, frozen=True)
class TaskSummary:
    total: int
    done: int
    locked: int

    @property
    def all_done(self) -> bool:
        return self.total > 0 and self.done == self.total

    @property
    def none_done(self) -> bool:
        return self.done == 0

    @property
    def all_locked(self) -> bool:
        return self.total > 0 and self.locked == self.total

    @property
    def none_locked(self) -> bool:
        return self.locked == 0
