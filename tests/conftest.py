"""Shared test fixtures for the todo board test suite."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

import httpx
import pytest
import pytest_asyncio

from todo_board.api import ListResult, TodoAPIError, TodoClient, TodoConnectionError
from todo_board.board import TodoBoard
from todo_board.cache import TaskCache
from todo_board.models import Task, TaskFields, to_wire
from todo_board.notify import RecordingNotifier


# ============================================================================
# Mock Response Data
# ============================================================================

MOCK_TASK_MILK = {
    "id": "42",
    "title": "Buy milk",
    "description": "Two litres, semi-skimmed",
    "category": "shopping",
    "priority": "high",
    "cardColor": "yellow",
    "startTime": "13:30",
    "endTime": "14:00",
    "dueDate": "2024-05-01",
    "isCompleted": False,
    "createdAt": "2024-04-30T09:00:00.000Z",
}

MOCK_TASK_REPORT = {
    "id": "7",
    "title": "Write report",
    "description": "Quarterly numbers for the team",
    "category": "work",
    "priority": "medium",
    "cardColor": "blue",
    "startTime": "00:15",
    "endTime": "09:45",
    "dueDate": "2024-05-10",
    "isCompleted": True,
    "createdAt": "2024-04-29T09:00:00.000Z",
}


# ============================================================================
# Fakes
# ============================================================================


class FakeTasksAPI:
    """In-memory stand-in for ``TasksAPI`` that records every call.

    ``fail`` holds operation names ("list", "create", "update", "delete")
    that should fail. ``gate``, when set, blocks mutations until released.
    """

    def __init__(self, records: list[dict[str, Any]] | None = None):
        self.records = [dict(r) for r in (records or [])]
        self.calls: list[tuple[str, Any]] = []
        self.fail: set[str] = set()
        self.gate: asyncio.Event | None = None
        self._ids = itertools.count(100)

    async def _maybe_block(self):
        if self.gate is not None:
            await self.gate.wait()

    def _find(self, task_id: str) -> dict[str, Any]:
        for record in self.records:
            if record["id"] == task_id:
                return record
        raise TodoAPIError("HTTP error! Status: 404", 404, {})

    async def list(self) -> ListResult:
        self.calls.append(("list", None))
        if "list" in self.fail:
            return ListResult(error=TodoConnectionError("connection refused"))
        return ListResult(tasks=[Task.from_dict(r) for r in self.records])

    async def create(self, fields: TaskFields) -> Task:
        self.calls.append(("create", fields))
        await self._maybe_block()
        if "create" in self.fail:
            raise TodoAPIError("HTTP error! Status: 500", 500, {})
        record = {
            **to_wire(fields.trimmed().to_dict()),
            "id": str(next(self._ids)),
            "isCompleted": False,
            "createdAt": "2024-06-01T12:00:00.000Z",
        }
        self.records.insert(0, record)
        return Task.from_dict(record)

    async def update(self, task_id: str, **changes: Any) -> Task:
        self.calls.append(("update", (task_id, changes)))
        await self._maybe_block()
        if "update" in self.fail:
            raise TodoAPIError("HTTP error! Status: 500", 500, {})
        record = self._find(task_id)
        record.update(to_wire(changes))
        return Task.from_dict(record)

    async def delete(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        await self._maybe_block()
        if "delete" in self.fail:
            raise TodoAPIError("HTTP error! Status: 500", 500, {})
        self.records.remove(self._find(task_id))

    def mutations(self) -> list[tuple[str, Any]]:
        return [c for c in self.calls if c[0] != "list"]


class FakeClient:
    def __init__(self, tasks_api: FakeTasksAPI):
        self.tasks = tasks_api

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return None

    async def close(self):
        return None


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def milk_record():
    return dict(MOCK_TASK_MILK)


@pytest.fixture
def report_record():
    return dict(MOCK_TASK_REPORT)


@pytest.fixture
def sample_tasks():
    """Two tasks, newest first: one active, one completed."""
    return [Task.from_dict(MOCK_TASK_MILK), Task.from_dict(MOCK_TASK_REPORT)]


@pytest.fixture
def fake_api():
    return FakeTasksAPI([MOCK_TASK_MILK, MOCK_TASK_REPORT])


@pytest.fixture
def fake_client(fake_api):
    return FakeClient(fake_api)


@pytest.fixture
def notifier():
    return RecordingNotifier(confirm_answer=True)


@pytest.fixture
def board(fake_client, notifier, sample_tasks):
    """Board preloaded with the sample tasks (no list call made)."""
    return TodoBoard(fake_client, notifier, cache=TaskCache(sample_tasks))


@pytest_asyncio.fixture
async def loaded_board(fake_client, notifier):
    """Board that went through ``load()`` against the fake API."""
    b = TodoBoard(fake_client, notifier)
    await b.load()
    return b


@pytest.fixture
def mock_transport_client():
    """Factory: TodoClient wired to an ``httpx.MockTransport`` handler.

    Returns ``(client, requests)``; ``requests`` collects every request sent.
    """
    def _create(handler):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = TodoClient(base_url="http://tasks.test", transport=httpx.MockTransport(_record))
        return client, requests

    return _create


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_client(monkeypatch, fake_client):
    """Point the CLI's ``TodoClient`` at the fake API."""
    monkeypatch.setattr("todo_board.cli.TodoClient", lambda *a, **kw: fake_client)
    return fake_client
