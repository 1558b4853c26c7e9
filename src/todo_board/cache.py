"""In-memory task cache mirroring the remote store.

The cache is reconciled from mutation responses (insert at head, replace by
id, remove by id) instead of re-fetching the whole list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from .models import Task

# Pending-guard key for a create request (no id assigned yet).
NEW_TASK = "__new__"


class OperationPendingError(RuntimeError):
    """A mutation for this task is already in flight."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Operation already pending for {key!r}")


class TaskCache:
    """Ordered sequence of tasks, newest first."""

    def __init__(self, tasks: Iterable[Task] = ()):
        self._tasks: list[Task] = list(tasks)
        self._pending: set[str] = set()

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return self._index(task_id) is not None

    def _index(self, task_id: object) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def get(self, task_id: str) -> Task | None:
        idx = self._index(task_id)
        return None if idx is None else self._tasks[idx]

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)

    def insert_at_head(self, task: Task) -> None:
        self._tasks.insert(0, task)

    def replace(self, task: Task) -> bool:
        """Swap in ``task`` at the slot holding its id. False if absent."""
        idx = self._index(task.id)
        if idx is None:
            return False
        self._tasks[idx] = task
        return True

    def remove(self, task_id: str) -> Task | None:
        idx = self._index(task_id)
        if idx is None:
            return None
        return self._tasks.pop(idx)

    # -------------------- in-flight guard --------------------

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    @contextmanager
    def pending(self, key: str) -> Iterator[None]:
        """Mark a mutation for ``key`` as in flight for the duration of the block."""
        if key in self._pending:
            raise OperationPendingError(key)
        self._pending.add(key)
        try:
            yield
        finally:
            self._pending.discard(key)
