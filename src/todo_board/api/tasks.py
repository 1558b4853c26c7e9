"""Tasks API.

The tasks resource is a plain json-server collection:
  GET    /tasks?_sort=-createdAt   — list, newest first
  POST   /tasks                    — create (server assigns ``id``)
  PATCH  /tasks/{taskId}           — partial update, returns the full record
  DELETE /tasks/{taskId}           — delete, no response body
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TYPE_CHECKING

from ..models import Task, TaskFields, to_wire
from .client import TodoAPIError, TodoError

if TYPE_CHECKING:
    from .client import TodoClient

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


@dataclass
class ListResult:
    """Outcome of a list call.

    ``tasks`` is empty both when the store has no tasks and when the fetch
    failed; ``error`` tells the two apart.
    """

    tasks: list[Task] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _task_from_payload(data: Any) -> Task:
    if not isinstance(data, dict):
        raise TodoAPIError(f"Unexpected task payload: {type(data).__name__}")
    try:
        return Task.from_dict(data)
    except ValueError as e:
        raise TodoAPIError(f"Unexpected task payload: {e}") from e


class TasksAPI:
    """CRUD operations on the tasks resource."""

    def __init__(self, client: "TodoClient"):
        self._client = client

    async def list(self) -> ListResult:
        """Fetch all tasks ordered by ``createdAt`` descending.

        Never raises: failures are logged and reported through
        ``ListResult.error`` with an empty task list.
        """
        try:
            data = await self._client._request("GET", TASKS_PATH, params={"_sort": "-createdAt"})
            if not isinstance(data, list):
                raise TodoError(f"Unexpected list payload: {type(data).__name__}")
            tasks = [_task_from_payload(item) for item in data]
        except (TodoError, ValueError) as e:
            logger.warning("Listing tasks failed: %s", e)
            return ListResult(error=e)
        return ListResult(tasks=tasks)

    async def create(self, fields: TaskFields) -> Task:
        """Create a task; it starts incomplete and stamped with the current time."""
        payload: dict[str, Any] = to_wire(fields.trimmed().to_dict())
        payload["isCompleted"] = False
        payload["createdAt"] = _utc_now_iso()
        try:
            data = await self._client._request("POST", TASKS_PATH, json=payload)
            task = _task_from_payload(data)
        except TodoError:
            logger.exception("Creating task %r failed", payload.get("title"))
            raise
        return task

    async def update(self, task_id: str, **changes: Any) -> Task:
        """Send a partial update and return the full updated record."""
        try:
            data = await self._client._request(
                "PATCH", f"{TASKS_PATH}/{task_id}", json=to_wire(changes),
            )
            task = _task_from_payload(data)
        except TodoError:
            logger.exception("Updating task %s failed", task_id)
            raise
        return task

    async def delete(self, task_id: str) -> None:
        """Delete a task. Success is judged by status code only."""
        try:
            await self._client._request("DELETE", f"{TASKS_PATH}/{task_id}", expect_body=False)
        except TodoError:
            logger.exception("Deleting task %s failed", task_id)
            raise
