"""Todo API client - async wrapper for the JSON-backed tasks resource."""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

import httpx

from ..config import settings

if TYPE_CHECKING:
    from .tasks import TasksAPI

logger = logging.getLogger(__name__)


class TodoError(Exception):
    """Base exception for todo API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)


class TodoAPIError(TodoError):
    """The tasks resource answered with a non-2xx status."""

    pass


class TodoConnectionError(TodoError):
    """The tasks resource could not be reached."""

    pass


class TodoClient:
    """Client for the tasks REST resource.

    Usage:
        async with TodoClient() as todo:
            result = await todo.tasks.list()
            task = await todo.tasks.create(TaskFields(title="Buy milk"))
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client: httpx.AsyncClient | None = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )
        self._tasks: TasksAPI | None = None

    async def __aenter__(self) -> "TodoClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def tasks(self) -> "TasksAPI":
        if self._tasks is None:
            from .tasks import TasksAPI
            self._tasks = TasksAPI(self)
        return self._tasks

    async def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
        expect_body: bool = True,
    ) -> Any:
        """Make an API request with error handling.

        With ``expect_body=False`` the response body is never parsed; success
        is judged by status code alone.
        """
        if self._client is None:
            raise RuntimeError("Client is closed")
        try:
            response = await self._client.request(
                method=method,
                url=path,
                params=params,
                json=json,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = None
            if e.response.content:
                try:
                    body = e.response.json()
                except ValueError:
                    body = e.response.text
            raise TodoAPIError(
                f"HTTP error! Status: {e.response.status_code}",
                e.response.status_code,
                body,
            ) from e
        except httpx.RequestError as e:
            raise TodoConnectionError(f"Request to {e.request.url} failed: {e}") from e

        if not expect_body:
            return None
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TodoAPIError(
                f"Malformed response body! Status: {response.status_code}",
                response.status_code,
                response.text,
            ) from e
