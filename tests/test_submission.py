# tests/test_submission.py

from __future__ import annotations

import httpx
import pytest

from itasks.tasks.submission import TaskSubmitter
from itasks.tasks.task_api import HttpTaskApi, SimulatedTaskApi, TaskApiError
from itasks.tasks.task_models import SubmissionErrorKind, Task, TaskDraft, TaskField

from .fakes import FakeTaskApi, RecordingSleep

ENDPOINT = "https://api.example.com/tasks"


@pytest.mark.asyncio
async def test_invalid_draft_short_circuits_before_any_io(
    submitter: TaskSubmitter, remote: FakeTaskApi, sleep: RecordingSleep
) -> None:
    result = await submitter.submit(TaskDraft(title="", description="ok"), ENDPOINT)

    assert not result.ok
    assert result.error is not None
    assert result.error.kind == SubmissionErrorKind.VALIDATION
    assert [e.field for e in result.error.field_errors] == [TaskField.TITLE]
    assert remote.created == []
    assert sleep.delays == []


@pytest.mark.asyncio
@pytest.mark.parametrize("endpoint", ["", "http://insecure.example.com/tasks"])
async def test_simulated_path_after_configured_delay(
    submitter: TaskSubmitter, remote: FakeTaskApi, sleep: RecordingSleep, endpoint: str
) -> None:
    result = await submitter.submit(TaskDraft(title="Buy milk", description="2 liters"), endpoint)

    assert result.ok
    assert result.task is not None
    assert (result.task.title, result.task.description) == ("Buy milk", "2 liters")
    assert result.task.id
    assert sleep.delays == [1.5]
    assert remote.created == []


@pytest.mark.asyncio
async def test_simulated_ids_unique_within_run(submitter: TaskSubmitter) -> None:
    draft = TaskDraft(title="Same", description="Same")

    ids = set()
    for _ in range(20):
        result = await submitter.submit(draft, "")
        assert result.task is not None
        ids.add(result.task.id)

    assert len(ids) == 20


@pytest.mark.asyncio
async def test_real_path_sends_normalized_fields(submitter: TaskSubmitter, remote: FakeTaskApi) -> None:
    result = await submitter.submit(TaskDraft(title="T", description="D"), ENDPOINT)

    assert result.ok
    assert result.task == Task(id="srv-1", title="T", description="D")
    assert [(ep, t.title, t.description) for ep, t in remote.created] == [(ENDPOINT, "T", "D")]


@pytest.mark.asyncio
async def test_real_path_failure_is_typed_network_error(
    submitter: TaskSubmitter, remote: FakeTaskApi
) -> None:
    remote.create_error = TaskApiError("down", status_code=None)

    result = await submitter.submit(TaskDraft(title="T", description="D"), ENDPOINT)

    assert result.task is None
    assert result.error is not None
    assert result.error.kind == SubmissionErrorKind.NETWORK
    assert result.error.status_code is None
    assert result.error.message == "Server failure. Code: no response."


def _http_submitter(status: int, body: dict | None = None) -> TaskSubmitter:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return TaskSubmitter(
        remote=HttpTaskApi(transport=httpx.MockTransport(handler)),
        simulated=SimulatedTaskApi(latency_seconds=0, sleep=RecordingSleep()),
    )


@pytest.mark.asyncio
async def test_http_201_yields_server_task() -> None:
    submitter = _http_submitter(201, {"id": "42", "title": "T", "description": "D"})

    result = await submitter.submit(TaskDraft(title="T", description="D"), ENDPOINT)

    assert result.task == Task(id="42", title="T", description="D")
    assert result.error is None


@pytest.mark.asyncio
async def test_http_500_yields_network_error_with_status() -> None:
    submitter = _http_submitter(500, {"error": "boom"})

    result = await submitter.submit(TaskDraft(title="T", description="D"), ENDPOINT)

    assert result.task is None
    assert result.error is not None
    assert result.error.kind == SubmissionErrorKind.NETWORK
    assert result.error.status_code == 500
    assert result.error.message == "Server failure. Code: 500."


@pytest.mark.asyncio
async def test_delete_without_real_endpoint_sends_nothing(
    submitter: TaskSubmitter, remote: FakeTaskApi
) -> None:
    assert await submitter.delete("1", "") is None
    assert remote.deleted == []


@pytest.mark.asyncio
async def test_delete_failure_returns_network_error(submitter: TaskSubmitter, remote: FakeTaskApi) -> None:
    remote.delete_error = TaskApiError("gone", status_code=404)

    error = await submitter.delete("1", ENDPOINT)

    assert error is not None
    assert error.status_code == 404
    assert remote.deleted == [(ENDPOINT, "1")]
