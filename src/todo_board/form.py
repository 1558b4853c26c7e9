"""Create/edit state of the task form and its title validation."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from .models import Task, TaskFields

CREATE_TITLE = "Add New Task"
CREATE_SUBMIT = "Add Task"
EDIT_TITLE = "Edit Task"
EDIT_SUBMIT = "Save Task"

DUPLICATE_ON_CREATE = "Title already exists in the list. Please enter a new title."
DUPLICATE_ON_EDIT = "Title can't be the same."
TITLE_REQUIRED = "Title is required."


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


def is_duplicate_task(tasks: Iterable[Task], title: str, exclude_id: str | None = None) -> bool:
    """True if another task already has this title (trimmed, case-insensitive)."""
    wanted = title.strip().lower()
    return any(
        t.title.strip().lower() == wanted and t.id != exclude_id
        for t in tasks
    )


class FormController:
    """Tracks whether the modal form creates a new task or edits one."""

    def __init__(self) -> None:
        self.mode = FormMode.CREATE
        self.edit_id: str | None = None
        self.values: dict[str, str] = TaskFields().to_dict()
        self.is_open = False

    @property
    def is_edit(self) -> bool:
        return self.mode is FormMode.EDIT

    @property
    def title_label(self) -> str:
        return EDIT_TITLE if self.is_edit else CREATE_TITLE

    @property
    def submit_label(self) -> str:
        return EDIT_SUBMIT if self.is_edit else CREATE_SUBMIT

    def open_create(self) -> None:
        self.reset()
        self.is_open = True

    def open_edit(self, task: Task) -> None:
        self.mode = FormMode.EDIT
        self.edit_id = task.id
        self.values = task.form_values()
        self.is_open = True

    def reset(self) -> None:
        self.mode = FormMode.CREATE
        self.edit_id = None
        self.values = TaskFields().to_dict()
        self.is_open = False

    def close_message(self) -> str:
        if self.is_edit:
            return "Are you sure you want to close the form?"
        return "Closing the form will reset all entered data. Are you sure?"

    def duplicate_message(self) -> str:
        return DUPLICATE_ON_EDIT if self.is_edit else DUPLICATE_ON_CREATE

    def validate(self, fields: TaskFields, tasks: Iterable[Task]) -> str | None:
        """Return the rejection message for ``fields``, or None if acceptable.

        ``fields`` is expected to be trimmed already.
        """
        if not fields.title:
            return TITLE_REQUIRED
        if is_duplicate_task(tasks, fields.title, exclude_id=self.edit_id):
            return self.duplicate_message()
        return None

    def as_context(self) -> dict[str, Any]:
        return {
            "open": self.is_open,
            "mode": self.mode.value,
            "edit_id": self.edit_id,
            "values": dict(self.values),
            "title_label": self.title_label,
            "submit_label": self.submit_label,
            "close_message": self.close_message(),
        }
