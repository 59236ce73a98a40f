# src/itasks/tasks/list_controller.py

"""
List screen logic: owns the task collection and reconciles results into it.

- created tasks are prepended (newest first)
- deletes are optimistic: the task leaves the list at once; if the server
  refuses, it is put back at its former position and the error is surfaced
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from .submission import TaskSubmitter
from .task_form import TaskForm
from .task_list import DuplicateTaskIdError, TaskList
from .task_models import Task

logger = logging.getLogger(__name__)

# Recent error messages kept for display.
ERROR_HISTORY_LIMIT = 20


class TaskListController:
    def __init__(
        self,
        submitter: TaskSubmitter,
        *,
        endpoint: str = "",
        tasks: TaskList | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.submitter = submitter
        self.endpoint = endpoint
        self.tasks = tasks if tasks is not None else TaskList()
        self.errors: deque[str] = deque(maxlen=ERROR_HISTORY_LIMIT)
        self.form: TaskForm | None = None
        self._on_error = on_error

    # ---- callbacks handed to the form ----

    def handle_task_created(self, task: Task) -> bool:
        """Prepend a created task. Returns False (list unchanged) for a duplicate id."""
        try:
            self.tasks.prepend(task)
        except DuplicateTaskIdError:
            logger.warning("Refusing created task with duplicate id=%s", task.id)
            return False
        logger.info("Task %s added to list (total=%d)", task.id, len(self.tasks))
        return True

    @property
    def last_error(self) -> str | None:
        return self.errors[-1] if self.errors else None

    def handle_error(self, message: str) -> None:
        self.errors.append(message)
        if self._on_error is not None:
            self._on_error(message)

    # ---- form lifecycle ----

    def open_form(self) -> TaskForm:
        """Open the creation form (the current one, if still open)."""
        if self.form is None:
            self.form = TaskForm(
                self.submitter,
                endpoint=self.endpoint,
                on_task_created=self.handle_task_created,
                on_error=self.handle_error,
                on_close=self._forget_form,
                close_on_success=True,
            )
        self.form.endpoint = self.endpoint
        return self.form

    def _forget_form(self) -> None:
        self.form = None

    # ---- delete ----

    async def delete_task(self, task_id: str) -> bool:
        """
        Remove a task now and confirm with the server when one is configured.

        Returns True when the task stays deleted.
        """
        removed = self.tasks.remove(task_id)
        if removed is None:
            logger.debug("Delete ignored: no task with id=%s", task_id)
            return False

        index, task = removed
        error = await self.submitter.delete(task_id, self.endpoint)
        if error is None:
            return True

        # A create may have landed meanwhile; clamp to the current length.
        try:
            self.tasks.insert(min(index, len(self.tasks)), task)
        except DuplicateTaskIdError:
            logger.debug("Task %s is already back in the list", task_id)
        logger.info("Delete of task %s rolled back (status=%s)", task_id, error.status_code)
        self.handle_error(error.message)
        return False
