# tests/test_task_list.py

from __future__ import annotations

import pytest

from itasks.tasks.task_list import DuplicateTaskIdError, TaskList
from itasks.tasks.task_models import Task


def _task(task_id: str, title: str = "Same") -> Task:
    return Task(id=task_id, title=title, description="d")


def test_prepend_keeps_newest_first() -> None:
    tasks = TaskList()
    tasks.prepend(_task("1", "old"))
    tasks.prepend(_task("2", "new"))

    assert [t.title for t in tasks] == ["new", "old"]


def test_duplicate_id_is_rejected_and_list_unchanged() -> None:
    tasks = TaskList([_task("1")])

    with pytest.raises(DuplicateTaskIdError):
        tasks.prepend(_task("1", "other"))

    assert tasks.snapshot() == [_task("1")]


def test_remove_by_id_leaves_same_titled_tasks() -> None:
    tasks = TaskList([_task("3"), _task("2"), _task("1")])

    removed = tasks.remove("2")

    assert removed == (1, _task("2"))
    assert [t.id for t in tasks] == ["3", "1"]
    assert "2" not in tasks


def test_remove_missing_id_returns_none() -> None:
    tasks = TaskList([_task("1")])

    assert tasks.remove("nope") is None
    assert len(tasks) == 1
