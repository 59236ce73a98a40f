# tests/test_endpoint.py

from __future__ import annotations

import pytest

from itasks.tasks.endpoint import is_real_endpoint_configured, task_url


@pytest.mark.parametrize(
    "endpoint",
    ["https://api.example.com/tareas", "https://localhost:3000/tasks/"],
)
def test_secure_endpoints_are_real(endpoint: str) -> None:
    assert is_real_endpoint_configured(endpoint)


@pytest.mark.parametrize("endpoint", ["", None, "http://api.example.com/tasks", "localhost:3000"])
def test_empty_or_insecure_endpoints_are_simulated(endpoint: str | None) -> None:
    assert not is_real_endpoint_configured(endpoint)


def test_marker_is_a_substring_test() -> None:
    # Not a scheme parse: the marker anywhere in the string counts.
    assert is_real_endpoint_configured("http://proxy.local/?next=https")


def test_task_url_joins_and_quotes_the_id() -> None:
    assert task_url("https://h/tasks", "42") == "https://h/tasks/42"
    assert task_url("https://h/tasks/", "42") == "https://h/tasks/42"
    assert task_url("https://h/tasks", "a/b c") == "https://h/tasks/a%2Fb%20c"
