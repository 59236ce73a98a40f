# src/itasks/tasks/task_form.py

from __future__ import annotations

import logging
from enum import StrEnum

from ..core.ports import CloseCallback, ErrorCallback, TaskCreatedCallback
from .submission import TaskSubmitter
from .task_models import (
    FieldError,
    SubmissionError,
    SubmissionErrorKind,
    SubmissionResult,
    TaskDraft,
    TaskField,
    friendly_submission_error_message,
)
from .validator import validate

logger = logging.getLogger(__name__)


class FormPhase(StrEnum):
    """
    Per-attempt lifecycle of the creation form.

    IDLE -> VALIDATING -> INVALID (back to IDLE on edit)
                       -> SUBMITTING -> SUCCEEDED
                                     -> FAILED (back to IDLE on retry)
    """

    IDLE = "idle"
    VALIDATING = "validating"
    INVALID = "invalid"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class TaskForm:
    """
    Creation form state: draft fields, inline field errors, submitting flag.

    Results go upward only through the callbacks. Field errors stay on the
    form; network errors and refused tasks go to on_error. The draft is kept
    on any failure and cleared only once the list accepted the new task.
    """

    def __init__(
        self,
        submitter: TaskSubmitter,
        *,
        endpoint: str,
        on_task_created: TaskCreatedCallback,
        on_error: ErrorCallback,
        on_close: CloseCallback | None = None,
        close_on_success: bool = False,
    ) -> None:
        self._submitter = submitter
        self.endpoint = endpoint
        self._on_task_created = on_task_created
        self._on_error = on_error
        self._on_close = on_close
        self._close_on_success = close_on_success

        self.title = ""
        self.description = ""
        self.errors: list[FieldError] = []
        self.phase = FormPhase.IDLE

    @property
    def is_submitting(self) -> bool:
        return self.phase == FormPhase.SUBMITTING

    @property
    def draft(self) -> TaskDraft:
        return TaskDraft(title=self.title, description=self.description)

    def field_error(self, field: TaskField) -> str | None:
        for e in self.errors:
            if e.field == field:
                return e.message
        return None

    def _edit(self, field: TaskField) -> None:
        self.errors = [e for e in self.errors if e.field != field]
        if self.phase in (FormPhase.INVALID, FormPhase.SUCCEEDED) and not self.errors:
            self.phase = FormPhase.IDLE

    def set_title(self, value: str) -> None:
        if self.is_submitting:
            return
        self.title = value
        self._edit(TaskField.TITLE)

    def set_description(self, value: str) -> None:
        if self.is_submitting:
            return
        self.description = value
        self._edit(TaskField.DESCRIPTION)

    async def submit(self) -> SubmissionResult | None:
        """
        Run one submission attempt.

        Returns None (and does nothing) while another attempt is in flight.
        """
        if self.is_submitting:
            logger.debug("Submit ignored: a submission is already in flight.")
            return None

        self.phase = FormPhase.VALIDATING
        draft = self.draft
        checked = validate(draft)
        if not checked.ok:
            self.errors = list(checked.errors)
            self.phase = FormPhase.INVALID
            return SubmissionResult(error=SubmissionError.validation(checked.errors))

        self.errors = []
        self.phase = FormPhase.SUBMITTING
        try:
            result = await self._submitter.submit(draft, self.endpoint)
        except Exception:
            # The submitter returns typed errors; anything else is a bug in a collaborator.
            self.phase = FormPhase.FAILED
            logger.exception("Task submission crashed.")
            self._on_error("Unknown failure while contacting the server.")
            raise

        if result.ok and result.task is not None:
            if not self._on_task_created(result.task):
                error = SubmissionError.conflict(result.task.id)
                self.phase = FormPhase.FAILED
                self._on_error(friendly_submission_error_message(error))
                return SubmissionResult(error=error)

            self.errors = []
            self.title = ""
            self.description = ""
            self.phase = FormPhase.SUCCEEDED
            if self._close_on_success:
                self.close()
            return result

        error = result.error
        if error is not None and error.kind == SubmissionErrorKind.VALIDATION:
            self.errors = list(error.field_errors)
            self.phase = FormPhase.INVALID
            return result

        self.phase = FormPhase.FAILED
        if error is not None:
            self._on_error(friendly_submission_error_message(error))
        return result

    def close(self) -> bool:
        """Close the form. Refused while a submission is in flight."""
        if self.is_submitting:
            return False
        if self._on_close is not None:
            self._on_close()
        return True
