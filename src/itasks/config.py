# src/itasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One frozen Settings object for the whole app, read once.
- No network endpoint baked into code: the API URL is only the initial value
  handed to the list screen, which passes it into every submission call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "ITASKS"

DEFAULT_SIMULATED_LATENCY_SECONDS = 1.5
# httpx's own default timeout.
DEFAULT_HTTP_TIMEOUT_SECONDS = 5.0


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Task API ----
    api_url: str
    simulated_latency_seconds: float
    http_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "itasks").strip() or "itasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/itasks"))

        api_url = _env(_k("API_URL"), "").strip()
        simulated_latency_seconds = _env_float(
            _k("SIMULATED_LATENCY_SECONDS"), DEFAULT_SIMULATED_LATENCY_SECONDS
        )
        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), DEFAULT_HTTP_TIMEOUT_SECONDS)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            api_url=api_url,
            simulated_latency_seconds=simulated_latency_seconds,
            http_timeout_seconds=http_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
