"""Task records and the form payload used to create or edit them."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

# Python attribute -> JSON key on the tasks resource
WIRE_NAMES: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "category": "category",
    "priority": "priority",
    "card_color": "cardColor",
    "start_time": "startTime",
    "end_time": "endTime",
    "due_date": "dueDate",
    "is_completed": "isCompleted",
    "created_at": "createdAt",
}
PYTHON_NAMES: dict[str, str] = {v: k for k, v in WIRE_NAMES.items()}


def to_wire(data: dict[str, Any]) -> dict[str, Any]:
    """Rename snake_case keys to the camelCase keys the API expects."""
    return {WIRE_NAMES.get(key, key): value for key, value in data.items()}


@dataclass
class TaskFields:
    """User-editable fields of a task, as submitted by the modal form."""

    title: str = ""
    description: str = ""
    category: str = ""
    priority: str = ""
    card_color: str = ""
    start_time: str = ""
    end_time: str = ""
    due_date: str = ""

    @classmethod
    def from_form(cls, data: dict[str, Any]) -> "TaskFields":
        """Build from form data keyed by either wire or Python names."""
        known = {f.name for f in fields(cls)}
        values: dict[str, str] = {}
        for key, value in data.items():
            name = PYTHON_NAMES.get(key, key)
            if name in known and value is not None:
                values[name] = str(value)
        return cls(**values)

    def trimmed(self) -> "TaskFields":
        return TaskFields(**{k: v.strip() for k, v in asdict(self).items()})

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class Task:
    """A single to-do item as stored by the remote tasks resource."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    priority: str = ""
    card_color: str = ""
    start_time: str = ""
    end_time: str = ""
    due_date: str = ""
    is_completed: bool = False
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a task from an API payload; unknown keys are ignored."""
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = PYTHON_NAMES.get(key)
            if name is None or value is None:
                continue
            values[name] = value
        if "id" not in values:
            raise ValueError("task payload has no id")
        values["id"] = str(values["id"])
        values["title"] = str(values.get("title", ""))
        values["is_completed"] = bool(values.get("is_completed", False))
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Export in the API's camelCase shape."""
        return to_wire(asdict(self))

    def form_values(self) -> dict[str, str]:
        """Field values used to pre-fill the edit form."""
        return TaskFields(
            title=self.title,
            description=self.description,
            category=self.category,
            priority=self.priority,
            card_color=self.card_color,
            start_time=self.start_time,
            end_time=self.end_time,
            due_date=self.due_date,
        ).to_dict()
