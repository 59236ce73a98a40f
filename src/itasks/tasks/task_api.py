# src/itasks/tasks/task_api.py

"""
Task API implementations.

- HttpTaskApi: the real service, JSON over HTTP via httpx.
- SimulatedTaskApi: local stand-in used when no secure endpoint is configured.
  It waits a fixed latency and manufactures the server-assigned identity.

Both satisfy core.ports.TaskApi.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_SIMULATED_LATENCY_SECONDS
from ..core.ports import Sleeper
from .endpoint import task_url
from .task_models import NormalizedTask, Task

logger = logging.getLogger(__name__)


class TaskApiError(RuntimeError):
    """Transport failure, non-2xx response or unusable response body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpTaskApi:
    """
    JSON task service client.

    A fresh AsyncClient is opened per call, so one instance can be shared by
    callers running on different event loops (e.g. one asyncio.run per
    console command).
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport
        self._headers = {"Accept": "application/json", **(headers or {})}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers=self._headers,
        )

    async def _request(self, method: str, url: str, *, json: Any = None) -> httpx.Response:
        try:
            async with self._client() as client:
                resp = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise TaskApiError(f"{method} {url} failed: {e.__class__.__name__}") from e

        if not resp.is_success:
            raise TaskApiError(
                f"{method} {url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        return resp

    async def create_task(self, endpoint: str, task: NormalizedTask) -> Task:
        resp = await self._request("POST", endpoint, json=task.to_payload())
        try:
            created = Task.model_validate(resp.json())
        except (ValidationError, ValueError) as e:
            # Not JSON (json.JSONDecodeError), or JSON that is not a task.
            raise TaskApiError(
                f"POST {endpoint} returned an unusable body: {e}",
                status_code=resp.status_code,
            ) from e

        logger.debug("Server created task id=%s status=%s", created.id, resp.status_code)
        return created

    async def delete_task(self, endpoint: str, task_id: str) -> None:
        resp = await self._request("DELETE", task_url(endpoint, task_id))
        logger.debug("Server deleted task id=%s status=%s", task_id, resp.status_code)


class LocalIdFactory:
    """
    Time-derived ids for simulated tasks.

    Ids are epoch milliseconds rendered as strings; when the clock has not
    advanced (or went backwards) the previous id + 1 is used, so ids from one
    factory are strictly increasing.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or time.time_ns
        self._last = 0

    def next_id(self) -> str:
        candidate = self._clock() // 1_000_000
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


class SimulatedTaskApi:
    """Latency-only stand-in for the task service. Never fails."""

    def __init__(
        self,
        *,
        latency_seconds: float = DEFAULT_SIMULATED_LATENCY_SECONDS,
        id_factory: LocalIdFactory | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.latency_seconds = max(0.0, float(latency_seconds))
        self._ids = id_factory or LocalIdFactory()
        self._sleep = sleep

    async def create_task(self, endpoint: str, task: NormalizedTask) -> Task:
        logger.info(
            "Simulation active: endpoint %r is not a secure URL, no real request is made.",
            endpoint,
        )
        await self._sleep(self.latency_seconds)
        return Task(id=self._ids.next_id(), title=task.title, description=task.description)

    async def delete_task(self, endpoint: str, task_id: str) -> None:
        logger.debug("Simulation active: nothing to delete remotely for task id=%s", task_id)
