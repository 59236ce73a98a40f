# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from itasks.logging_setup import ConsoleFilter, setup_logging


@pytest.fixture()
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    for h in root.handlers[:]:
        installed = isinstance(h, logging.FileHandler) or any(
            isinstance(f, ConsoleFilter) for f in h.filters
        )
        if installed:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_lets_simulation_notice_through() -> None:
    f = ConsoleFilter()

    assert f.filter(_record("itasks.tasks.task_api", logging.INFO))
    assert f.filter(_record("itasks", logging.DEBUG))


def test_console_filter_quiets_foreign_loggers() -> None:
    f = ConsoleFilter()

    assert not f.filter(_record("httpx", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("itasksextra", logging.INFO))
    assert f.filter(_record("httpx", logging.ERROR))


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("itasks.tasks.task_api").info("Simulation active: test")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "itasks.log"
    assert "Simulation active: test" in log_file.read_text(encoding="utf-8")


@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path: Path) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    assert len(logging.getLogger().handlers) == 2
