# src/itasks/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import re
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.endpoint import is_real_endpoint_configured
from ..tasks.task_form import TaskForm
from ..tasks.task_models import SubmissionErrorKind, SubmissionResult, TaskField

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler4 = Callable[[AppState, list[str], CommandEmitter | None, str], str]
CommandHandler = CommandHandler2 | CommandHandler3 | CommandHandler4

logger = logging.getLogger(__name__)

# "/name rest": the rest keeps its whitespace for handlers that parse it themselves.
_COMMAND_RE = re.compile(r"(\S+)\s?(.*)", re.DOTALL)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        match = _COMMAND_RE.match(line[1:])
        if match is None:
            return "Empty command. Use /help to list available commands."

        name = match.group(1).lower()
        raw = match.group(2)
        args = raw.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 4:
            h4 = cast(CommandHandler4, handler)
            return h4(state, args, emit, raw)

        if nparams == 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

ADD_USAGE = "Usage: /add <title> | <description>"


def _mode(endpoint: str) -> str:
    return "server" if is_real_endpoint_configured(endpoint) else "simulation"


def _describe_result(form: TaskForm, result: SubmissionResult | None) -> str:
    if result is None:
        return "Saving... a submission is already in progress."

    if result.ok and result.task is not None:
        return f"Task created: [{result.task.id}] {result.task.title}"

    error = result.error
    if error is not None and error.kind == SubmissionErrorKind.VALIDATION:
        lines = [error.message]
        for field in TaskField:
            msg = form.field_error(field)
            if msg:
                lines.append(f"  {field.value}: {msg}")
        return "\n".join(lines)

    msg = error.message if error is not None else "Unknown failure while contacting the server."
    return f"{msg} Your draft was kept; use /retry to send it again."


def _run_submit(form: TaskForm, emit: CommandEmitter | None) -> str:
    if emit and not form.is_submitting:
        with contextlib.suppress(Exception):
            emit(f"Saving... ({_mode(form.endpoint)})")
    result = asyncio.run(form.submit())
    return _describe_result(form, result)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    controller = state.controller
    endpoint = controller.endpoint or "<none>"
    form = "open" if controller.form is not None else "closed"
    return (
        "Status:\n"
        f"  Endpoint: {endpoint} ({_mode(controller.endpoint)})\n"
        f"  Tasks: {len(controller.tasks)}\n"
        f"  Form: {form}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.controller.tasks.snapshot()
    if not tasks:
        return "No pending tasks. Use /add to create one."
    lines = [f"Tasks ({len(tasks)}):"]
    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. [{t.id}] {t.title} - {t.description}")
    return "\n".join(lines)


def cmd_add(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
    raw: str = "",
) -> str:
    """
    /add <title> | <description>

    Fills the creation form and submits it. On failure the draft stays in the
    form; /retry resubmits it.

    Text is taken as typed: only the single space on each side of the "|"
    is dropped, so validation sees the real field values.
    """
    if "|" not in raw:
        return ADD_USAGE
    title, description = raw.split("|", 1)
    title = title.removesuffix(" ")
    description = description.removeprefix(" ")

    form = state.controller.open_form()
    if form.is_submitting:
        return "Saving... a submission is already in progress."
    form.set_title(title)
    form.set_description(description)
    return _run_submit(form, emit)


def cmd_retry(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    form = state.controller.form
    if form is None:
        return "Nothing to retry. Use /add to create a task."
    return _run_submit(form, emit)


def cmd_cancel(state: AppState, args: list[str]) -> str:
    form = state.controller.form
    if form is None:
        return "No form is open."
    if not form.close():
        return "Cannot cancel while saving."
    return "Form closed, draft discarded."


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /delete <id>"
    task_id = args[0]
    if task_id not in state.controller.tasks:
        return f"No task with id {task_id}."

    logger.debug("Delete requested id=%s", task_id)
    if asyncio.run(state.controller.delete_task(task_id)):
        return f"Task {task_id} deleted."
    message = state.controller.last_error or "Delete failed."
    return f"{message} Task {task_id} was restored."


def cmd_endpoint(state: AppState, args: list[str]) -> str:
    """
    /endpoint          -> show the endpoint
    /endpoint <url>    -> use this endpoint for the next submissions
    /endpoint off      -> clear it (simulation)
    """
    controller = state.controller
    if not args:
        return f"Endpoint: {controller.endpoint or '<none>'} ({_mode(controller.endpoint)})"

    arg = args[0]
    controller.endpoint = "" if arg.lower() in ("off", "none", "-") else arg
    if controller.form is not None:
        controller.form.endpoint = controller.endpoint
    return f"Endpoint set to {controller.endpoint or '<none>'} ({_mode(controller.endpoint)})."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show endpoint, mode and task count.")
registry.register("list", cmd_list, help_text="Show tasks, newest first.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Create a task: /add <title> | <description>.")
registry.register("retry", cmd_retry, help_text="Resubmit the draft kept after a failure.")
registry.register("cancel", cmd_cancel, help_text="Close the creation form.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register(
    "endpoint", cmd_endpoint, help_text="Show or set the API endpoint: /endpoint <url> | off."
)
