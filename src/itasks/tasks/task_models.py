# src/itasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ASCII letters, digits and ASCII whitespace, whole string.
ALLOWED_TEXT_PATTERN = r"^[A-Za-z0-9 \t\n\r\f\v]+$"


class TaskField(StrEnum):
    TITLE = "title"
    DESCRIPTION = "description"


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Unvalidated form input. Has no identity until promoted to a Task."""

    title: str = ""
    description: str = ""


class NormalizedTask(BaseModel):
    """A draft that passed validation, unchanged (no trimming), ready to be sent."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, pattern=ALLOWED_TEXT_PATTERN)
    description: str = Field(min_length=1, pattern=ALLOWED_TEXT_PATTERN)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class Task(BaseModel):
    """A task as the server (or the simulation) returned it. Extra body keys are ignored."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    description: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, v: Any) -> Any:
        # Servers may hand out numeric ids; the id is opaque to us.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass(slots=True, frozen=True)
class FieldError:
    field: TaskField
    message: str


@dataclass(slots=True, frozen=True)
class ValidationResult:
    task: NormalizedTask | None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.task is not None and not self.errors

    def errors_for(self, field: TaskField) -> list[FieldError]:
        return [e for e in self.errors if e.field == field]


class SubmissionErrorKind(StrEnum):
    VALIDATION = "validation"
    NETWORK = "network"
    CONFLICT = "conflict"


@dataclass(slots=True, frozen=True)
class SubmissionError:
    """
    Typed failure of one submission attempt.

    - VALIDATION carries field_errors; nothing was sent anywhere.
    - NETWORK carries the HTTP status code when the server answered
      (None for transport failures).
    - CONFLICT: the task was created but the list refused it (its id is
      already shown).
    """

    kind: SubmissionErrorKind
    message: str
    field_errors: tuple[FieldError, ...] = ()
    status_code: int | None = None

    @classmethod
    def validation(cls, field_errors: tuple[FieldError, ...]) -> SubmissionError:
        return cls(
            kind=SubmissionErrorKind.VALIDATION,
            message=VALIDATION_FAILED_MESSAGE,
            field_errors=field_errors,
        )

    @classmethod
    def network(cls, status_code: int | None) -> SubmissionError:
        return cls(
            kind=SubmissionErrorKind.NETWORK,
            message=friendly_network_error_message(status_code),
            status_code=status_code,
        )

    @classmethod
    def conflict(cls, task_id: str) -> SubmissionError:
        return cls(
            kind=SubmissionErrorKind.CONFLICT,
            message=f"Task {task_id} is already in the list.",
        )


@dataclass(slots=True, frozen=True)
class SubmissionResult:
    task: Task | None = None
    error: SubmissionError | None = None

    @property
    def ok(self) -> bool:
        return self.task is not None and self.error is None


VALIDATION_FAILED_MESSAGE = "Validation error: check the form fields."


def friendly_network_error_message(status_code: int | None) -> str:
    code = str(status_code) if status_code is not None else "no response"
    return f"Server failure. Code: {code}."


def friendly_submission_error_message(error: SubmissionError) -> str:
    if error.kind == SubmissionErrorKind.VALIDATION:
        return VALIDATION_FAILED_MESSAGE
    if error.kind == SubmissionErrorKind.NETWORK:
        return friendly_network_error_message(error.status_code)
    return error.message
