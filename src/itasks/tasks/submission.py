# src/itasks/tasks/submission.py

from __future__ import annotations

"""
Task submission workflow.

validate -> pick real or simulated API from the endpoint -> create -> typed result.

The workflow never touches the caller's task collection and never raises
across its boundary: every outcome is a SubmissionResult. Reconciling the
result into a list is the caller's job (see list_controller).
"""

import logging

from ..core.ports import TaskApi
from .endpoint import is_real_endpoint_configured
from .task_api import TaskApiError
from .task_models import SubmissionError, SubmissionResult, TaskDraft
from .validator import validate

logger = logging.getLogger(__name__)


class TaskSubmitter:
    def __init__(self, *, remote: TaskApi, simulated: TaskApi) -> None:
        self.remote = remote
        self.simulated = simulated

    def api_for(self, endpoint: str) -> TaskApi:
        return self.remote if is_real_endpoint_configured(endpoint) else self.simulated

    async def submit(self, draft: TaskDraft, endpoint: str) -> SubmissionResult:
        """
        Validate and create one task. No retries.

        Validation failures return before any I/O. Network failures (real path
        only) carry the HTTP status code when the server answered.
        """
        checked = validate(draft)
        if not checked.ok or checked.task is None:
            logger.debug("Draft rejected: %d field error(s)", len(checked.errors))
            return SubmissionResult(error=SubmissionError.validation(checked.errors))

        real = is_real_endpoint_configured(endpoint)
        api = self.api_for(endpoint)

        try:
            task = await api.create_task(endpoint, checked.task)
        except TaskApiError as e:
            logger.warning("Task submission failed (status=%s): %s", e.status_code, e)
            return SubmissionResult(error=SubmissionError.network(e.status_code))

        logger.info("Task created id=%s (%s)", task.id, "server" if real else "simulated")
        return SubmissionResult(task=task)

    async def delete(self, task_id: str, endpoint: str) -> SubmissionError | None:
        """
        Ask the server to delete a task.

        Nothing is sent when no real endpoint is configured. Returns the
        network error, or None on success.
        """
        if not is_real_endpoint_configured(endpoint):
            await self.simulated.delete_task(endpoint, task_id)
            return None

        try:
            await self.remote.delete_task(endpoint, task_id)
        except TaskApiError as e:
            logger.warning("Task delete failed id=%s (status=%s): %s", task_id, e.status_code, e)
            return SubmissionError.network(e.status_code)

        logger.info("Task deleted on server id=%s", task_id)
        return None
