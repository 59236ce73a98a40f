# src/itasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "itasks.log"

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are chatty at INFO; the file still gets everything they emit.
QUIET_LIBRARIES = ("httpx", "httpcore")


class ConsoleFilter(logging.Filter):
    """
    Keep the interactive console readable.

    Records from the app itself pass at any level (the handler level still
    applies, so "Simulation active" notices show at INFO). Everything else,
    captured warnings included, needs `foreign_level`.
    """

    def __init__(self, app_prefix: str = "itasks", foreign_level: int = logging.ERROR) -> None:
        super().__init__()
        self.app_prefix = app_prefix
        self.foreign_level = foreign_level

    def _is_app_record(self, name: str) -> bool:
        return name == self.app_prefix or name.startswith(self.app_prefix + ".")

    def filter(self, record: logging.LogRecord) -> bool:
        if self._is_app_record(record.name):
            return True
        return record.levelno >= self.foreign_level


def _handler(
    handler: logging.Handler, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/itasks",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (filtered) and to `<log_dir>/itasks.log` (unfiltered).

    Replaces whatever handlers the root logger had, so calling it again does
    not duplicate output. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console = _handler(logging.StreamHandler(sys.stderr), console_level, formatter)
    console.addFilter(ConsoleFilter())
    to_file = _handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, formatter)

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    root.setLevel(min(console_level, file_level))
    root.addHandler(console)
    root.addHandler(to_file)

    logging.captureWarnings(True)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
