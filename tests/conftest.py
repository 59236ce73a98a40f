# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from itasks.cli.bootstrap import create_initial_state
from itasks.core.state import AppState
from itasks.tasks.submission import TaskSubmitter
from itasks.tasks.task_api import SimulatedTaskApi

from .fakes import FakeTaskApi, RecordingSleep


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the CLI.

    We use a SimpleNamespace rather than importing real config, to keep unit
    tests isolated from the environment (.env, ITASKS_* variables).
    """
    return SimpleNamespace(
        app_name="itasks-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_url="",
        simulated_latency_seconds=0.0,
        http_timeout_seconds=1.0,
    )


@pytest.fixture()
def remote() -> FakeTaskApi:
    return FakeTaskApi()


@pytest.fixture()
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def simulated(sleep: RecordingSleep) -> SimulatedTaskApi:
    return SimulatedTaskApi(latency_seconds=1.5, sleep=sleep)


@pytest.fixture()
def submitter(remote: FakeTaskApi, simulated: SimulatedTaskApi) -> TaskSubmitter:
    """Real submission workflow; the network side is a fake, the simulation does not sleep."""
    return TaskSubmitter(remote=remote, simulated=simulated)


@pytest.fixture()
def state(settings: SimpleNamespace, submitter: TaskSubmitter) -> AppState:
    return create_initial_state(settings=settings, submitter=submitter)
