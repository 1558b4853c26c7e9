"""Board session: the task cache, the current view and the user actions on them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .api.client import TodoError
from .cache import NEW_TASK, OperationPendingError, TaskCache
from .filters import Tab, filter_by_tab, search_tasks
from .form import FormController
from .models import Task, TaskFields
from .notify import Notifier, ToastKind
from .render import render_tasks

if TYPE_CHECKING:
    from .api.client import TodoClient

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while processing the task. Please try again."
STILL_SAVING = "This task is still being saved. Please wait."

TASK_ADDED = "Task added successfully!"
TASK_UPDATED = "Task updated successfully!"
TASK_DELETED = "Task deleted successfully!"


class TodoBoard:
    """One client session over the tasks resource.

    The cache is the only data source for rendering. It is reconciled from
    each mutation's response and never re-fetched after a mutation.
    """

    def __init__(self, client: "TodoClient", notifier: Notifier, cache: TaskCache | None = None):
        self.client = client
        self.notifier = notifier
        self.cache = cache if cache is not None else TaskCache()
        self.form = FormController()
        self.tab = Tab.ALL
        self.query = ""
        self.visible_tasks: list[Task] = list(self.cache)
        self.view = render_tasks(self.visible_tasks)
        self.load_error: Exception | None = None

    # -------------------- rendering --------------------

    def _show(self, tasks: list[Task]) -> str:
        self.visible_tasks = tasks
        self.view = render_tasks(tasks)
        return self.view

    def render(self) -> str:
        """Re-render the full cache (what every mutation shows afterwards)."""
        return self._show(list(self.cache))

    # -------------------- loading --------------------

    async def load(self) -> bool:
        result = await self.client.tasks.list()
        self.cache.replace_all(result.tasks)
        self.load_error = result.error
        self.render()
        return result.ok

    # -------------------- filtering --------------------

    def select_tab(self, tab: Tab) -> list[Task]:
        self.tab = tab
        self._show(filter_by_tab(self.cache, tab))
        return self.visible_tasks

    def focus_search(self) -> list[Task]:
        """Focusing the search box jumps back to the All tab."""
        self.tab = Tab.ALL
        self.render()
        return self.visible_tasks

    def search(self, query: str) -> list[Task]:
        self.query = query
        self._show(search_tasks(self.cache, query))
        return self.visible_tasks

    # -------------------- task actions --------------------

    def _lookup(self, task_id: str) -> Task | None:
        task = self.cache.get(str(task_id))
        if task is None:
            logger.debug("Ignoring action on unknown task %s", task_id)
        return task

    async def complete_task(self, task_id: str) -> Task | None:
        """Toggle completion of a task."""
        task = self._lookup(task_id)
        if task is None:
            return None
        try:
            with self.cache.pending(task.id):
                updated = await self.client.tasks.update(task.id, is_completed=not task.is_completed)
        except OperationPendingError:
            self.notifier.alert(STILL_SAVING)
            return None
        except TodoError:
            self.notifier.alert(GENERIC_ERROR)
            return None
        if not self.cache.replace(updated):
            logger.warning("Task %s left the board before its update returned", updated.id)
            return None
        self.render()
        self.notifier.toast(TASK_UPDATED, ToastKind.UPDATED)
        return updated

    async def delete_task(self, task_id: str) -> bool:
        task = self._lookup(task_id)
        if task is None:
            return False
        if self.cache.is_pending(task.id):
            self.notifier.alert(STILL_SAVING)
            return False
        if not await self.notifier.confirm(f'Are you sure you want to delete "{task.title}"?'):
            return False
        try:
            with self.cache.pending(task.id):
                await self.client.tasks.delete(task.id)
        except OperationPendingError:
            self.notifier.alert(STILL_SAVING)
            return False
        except TodoError:
            self.notifier.alert(GENERIC_ERROR)
            return False
        self.cache.remove(task.id)
        self.render()
        self.notifier.toast(TASK_DELETED, ToastKind.DELETED)
        return True

    # -------------------- form --------------------

    def open_create(self) -> None:
        self.form.open_create()

    def open_edit(self, task_id: str) -> bool:
        task = self._lookup(task_id)
        if task is None:
            return False
        self.form.open_edit(task)
        return True

    async def close_form(self) -> bool:
        if not await self.notifier.confirm(self.form.close_message()):
            return False
        self.form.reset()
        return True

    async def submit_form(self, fields: TaskFields) -> Task | None:
        """Create or update from the form, depending on its mode.

        Rejected or failed submissions leave the cache and the form mode untouched.
        """
        fields = fields.trimmed()
        self.form.is_open = True
        self.form.values = fields.to_dict()
        rejection = self.form.validate(fields, self.cache)
        if rejection:
            self.notifier.alert(rejection)
            return None

        edit_id = self.form.edit_id
        try:
            if edit_id is not None:
                with self.cache.pending(edit_id):
                    task = await self.client.tasks.update(edit_id, **fields.to_dict())
                self.cache.replace(task)
                message, kind = TASK_UPDATED, ToastKind.UPDATED
            else:
                with self.cache.pending(NEW_TASK):
                    task = await self.client.tasks.create(fields)
                self.cache.insert_at_head(task)
                message, kind = TASK_ADDED, ToastKind.SUCCESS
        except OperationPendingError:
            self.notifier.alert(STILL_SAVING)
            return None
        except Exception:
            logger.exception("Error in submit_form")
            self.notifier.alert(GENERIC_ERROR)
            return None

        self.render()
        self.notifier.toast(message, kind)
        self.form.reset()
        return task
