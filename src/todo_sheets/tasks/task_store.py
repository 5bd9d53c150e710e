# src/todo_sheets/tasks/task_store.py

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import replace

from .task_models import ImportedTask, Rejection, Task, TaskSummary, comparison_key

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store (authoritative collection for the session).

    Layout:
    - _tasks: id -> Task, dict insertion order is the collection order
    - _ids_by_key: comparison key -> id, kept in sync for O(1) uniqueness checks

    Invariants:
    - no two tasks share a comparison key
    - ids come from a strictly increasing counter and are never reused
    - locked tasks are never removed

    Every public method either applies fully or changes nothing.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._ids_by_key: dict[str, int] = {}
        self._id_seq = itertools.count(1)
        logger.debug("TaskStore ready")

    # ---- low-level helpers ----

    def _next_id(self) -> int:
        return next(self._id_seq)

    def _put(self, task: Task) -> None:
        old = self._tasks.get(task.id)
        if old is not None and old.key != task.key:
            del self._ids_by_key[old.key]
        self._tasks[task.id] = task
        self._ids_by_key[task.key] = task.id

    def _drop(self, task_id: int) -> None:
        task = self._tasks.pop(task_id)
        del self._ids_by_key[task.key]

    def _append_new(self, text: str, *, done: bool = False) -> Task:
        task = Task(id=self._next_id(), text=text, done=done, locked=False)
        self._put(task)
        return task

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._tasks)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    def has_text(self, text: str, *, exclude_id: int | None = None) -> bool:
        owner = self._ids_by_key.get(comparison_key(text))
        return owner is not None and owner != exclude_id

    def check_text(self, text: str, *, exclude_id: int | None = None) -> Rejection | None:
        """Return why `text` would be refused for add/edit, or None if it is acceptable."""
        if not text.strip():
            return Rejection.EMPTY
        if self.has_text(text, exclude_id=exclude_id):
            return Rejection.DUPLICATE
        return None

    def summary(self) -> TaskSummary:
        tasks = self._tasks.values()
        return TaskSummary(
            total=len(self._tasks),
            done=sum(1 for t in tasks if t.done),
            locked=sum(1 for t in tasks if t.locked),
        )

    # ---- single-task operations ----

    def add(self, raw_text: str) -> Task | None:
        """Append a new task; None if the text is empty or already present."""
        rejection = self.check_text(raw_text)
        if rejection is not None:
            logger.debug("add rejected (%s): %r", rejection, raw_text)
            return None
        task = self._append_new(raw_text.strip())
        logger.debug("Task added id=%s text=%r", task.id, task.text)
        return task

    def set_status(self, task_id: int, done: bool) -> bool:
        """Set completion; allowed on locked tasks. False if id is unknown."""
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("set_status: unknown id=%s", task_id)
            return False
        self._put(replace(task, done=bool(done)))
        logger.debug("Task %s done=%s", task_id, bool(done))
        return True

    def remove(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("remove rejected (%s): id=%s", Rejection.NOT_FOUND, task_id)
            return False
        if task.locked:
            logger.debug("remove rejected (%s): id=%s", Rejection.LOCKED, task_id)
            return False
        self._drop(task_id)
        logger.debug("Task removed id=%s", task_id)
        return True

    def toggle_lock(self, task_id: int) -> bool:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("toggle_lock: unknown id=%s", task_id)
            return False
        self._put(replace(task, locked=not task.locked))
        logger.debug("Task %s locked=%s", task_id, not task.locked)
        return True

    def edit(self, task_id: int, new_text: str) -> bool:
        """
        Replace the text of a task, keeping id/done/locked.

        Refused when the text is empty, the task is locked or unknown, or another
        task already has the same comparison key (the task itself is excluded,
        so re-casing its own text is allowed).
        """
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("edit rejected (%s): id=%s", Rejection.NOT_FOUND, task_id)
            return False
        if task.locked:
            logger.debug("edit rejected (%s): id=%s", Rejection.LOCKED, task_id)
            return False
        rejection = self.check_text(new_text, exclude_id=task_id)
        if rejection is not None:
            logger.debug("edit rejected (%s): id=%s text=%r", rejection, task_id, new_text)
            return False
        self._put(replace(task, text=new_text.strip()))
        logger.debug("Task %s edited text=%r", task_id, new_text.strip())
        return True

    # ---- bulk operations ----

    def clear_unlocked(self) -> int:
        """
        Remove every unlocked task, done or not. Returns how many were removed.

        Irreversible: callers must confirm with the user first.
        """
        doomed = [t.id for t in self._tasks.values() if not t.locked]
        for task_id in doomed:
            self._drop(task_id)
        logger.info("Cleared %d unlocked task(s); %d locked remain", len(doomed), len(self._tasks))
        return len(doomed)

    def lock_all(self, lock: bool) -> None:
        for task in list(self._tasks.values()):
            self._put(replace(task, locked=bool(lock)))
        logger.debug("lock_all(%s) on %d task(s)", bool(lock), len(self._tasks))

    def complete_all(self, done: bool) -> None:
        for task in list(self._tasks.values()):
            self._put(replace(task, done=bool(done)))
        logger.debug("complete_all(%s) on %d task(s)", bool(done), len(self._tasks))

    def merge(self, imported: Iterable[ImportedTask]) -> list[Task]:
        """
        Append imported rows whose comparison key is new.

        A row is skipped when its key matches a task already in the store or a
        row accepted earlier in the same batch. Accepted rows keep their order,
        get fresh ids and start unlocked. Returns the tasks actually added.
        """
        rows = list(imported)
        accepted: list[ImportedTask] = []
        seen: set[str] = set()
        for row in rows:
            text = (row.text or "").strip()
            if not text:
                continue
            key = comparison_key(text)
            if key in self._ids_by_key or key in seen:
                continue
            seen.add(key)
            accepted.append(ImportedTask(text=text, done=bool(row.done)))

        added = [self._append_new(row.text, done=row.done) for row in accepted]
        logger.info(
            "Merged import: %d row(s) read, %d added, %d skipped as duplicates/empty",
            len(rows),
            len(added),
            len(rows) - len(added),
        )
        return added
