# src/itasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the HTTP client, the simulation and the list screen into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.endpoint import is_real_endpoint_configured
from ..tasks.list_controller import TaskListController
from ..tasks.submission import TaskSubmitter
from ..tasks.task_api import HttpTaskApi, SimulatedTaskApi

logger = logging.getLogger(__name__)


def build_submitter(settings) -> TaskSubmitter:
    return TaskSubmitter(
        remote=HttpTaskApi(timeout=settings.http_timeout_seconds),
        simulated=SimulatedTaskApi(latency_seconds=settings.simulated_latency_seconds),
    )


def create_initial_state(*, settings=None, submitter: TaskSubmitter | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    controller = TaskListController(
        submitter or build_submitter(settings),
        endpoint=settings.api_url,
    )
    logger.info(
        "Task list ready (endpoint=%s, mode=%s)",
        settings.api_url or "<none>",
        "server" if is_real_endpoint_configured(settings.api_url) else "simulation",
    )
    return AppState(settings=settings, controller=controller)
