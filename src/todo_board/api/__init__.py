"""Todo API client module.

Usage:
    from todo_board.api import TodoClient

    async with TodoClient() as todo:
        result = await todo.tasks.list()
        task = await todo.tasks.update(task_id, is_completed=True)
"""

from .client import TodoAPIError, TodoClient, TodoConnectionError, TodoError
from .tasks import ListResult, TasksAPI

__all__ = [
    "TodoClient",
    "TodoError",
    "TodoAPIError",
    "TodoConnectionError",
    "TasksAPI",
    "ListResult",
]
