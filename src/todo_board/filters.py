"""Tab and search filters over the task cache.

Both return new lists and leave their input untouched. They are not
composed: whichever the user triggered last decides the visible list.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .models import Task


class Tab(Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> "Tab":
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown tab {raw!r}; expected one of: all, active, completed") from None


def filter_by_tab(tasks: Iterable[Task], tab: Tab) -> list[Task]:
    if tab is Tab.ACTIVE:
        return [t for t in tasks if not t.is_completed]
    if tab is Tab.COMPLETED:
        return [t for t in tasks if t.is_completed]
    return list(tasks)


def search_tasks(tasks: Iterable[Task], query: str | None) -> list[Task]:
    """Case-insensitive substring match on title or description."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(tasks)
    return [
        t for t in tasks
        if needle in t.title.strip().lower() or needle in t.description.strip().lower()
    ]
