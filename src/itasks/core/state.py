# src/itasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.list_controller import TaskListController


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in with the same fields).
    settings: Any

    controller: TaskListController
