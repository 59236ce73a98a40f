# src/itasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the real HTTP client and the local simulation swappable and makes
testing easier.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from ..tasks.task_models import NormalizedTask, Task


class TaskApi(Protocol):
    """Remote (or simulated) task service."""

    async def create_task(self, endpoint: str, task: NormalizedTask) -> Task: ...

    async def delete_task(self, endpoint: str, task_id: str) -> None: ...


# Caller callbacks: the workflow's only way to report upward.
# on_task_created returns False when the list refuses the task.
TaskCreatedCallback = Callable[[Task], bool]
ErrorCallback = Callable[[str], None]
CloseCallback = Callable[[], None]

Sleeper = Callable[[float], Awaitable[None]]
