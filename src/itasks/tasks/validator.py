# src/itasks/tasks/validator.py

"""
Draft validation.

The rules live on NormalizedTask (pydantic constraints); this module turns a
draft into either that model or one FieldError per failing field:
- required: the raw string is empty
- pattern: ASCII letters, digits and whitespace only

Nothing is trimmed, so whitespace-only input passes both rules.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .task_models import FieldError, NormalizedTask, TaskDraft, TaskField, ValidationResult

PATTERN_MESSAGE = "Only alphanumeric characters and spaces are allowed."

REQUIRED_MESSAGES: dict[TaskField, str] = {
    TaskField.TITLE: "Title is required.",
    TaskField.DESCRIPTION: "Description is required.",
}

# pydantic error types meaning "no usable text at all".
_REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "string_type"}


def _field_error(err: dict[str, Any]) -> FieldError | None:
    loc = err.get("loc") or ()
    if not loc or loc[0] not in set(TaskField):
        return None
    field = TaskField(loc[0])
    if err.get("type") in _REQUIRED_ERROR_TYPES:
        return FieldError(field=field, message=REQUIRED_MESSAGES[field])
    return FieldError(field=field, message=PATTERN_MESSAGE)


def validate(draft: TaskDraft) -> ValidationResult:
    """Return the normalized task, or every field error found in the draft."""
    try:
        task = NormalizedTask.model_validate(
            {"title": draft.title, "description": draft.description}
        )
    except ValidationError as e:
        by_field: dict[TaskField, FieldError] = {}
        for err in e.errors():
            fe = _field_error(err)
            # One error per field; "required" wins over "pattern".
            if fe is None or (fe.field in by_field and fe.message == PATTERN_MESSAGE):
                continue
            by_field[fe.field] = fe
        errors = tuple(by_field[f] for f in TaskField if f in by_field)
        return ValidationResult(task=None, errors=errors)

    return ValidationResult(task=task)
