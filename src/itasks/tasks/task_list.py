# src/itasks/tasks/task_list.py

from __future__ import annotations

from collections.abc import Iterator

from .task_models import Task


class DuplicateTaskIdError(ValueError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task id already in list: {task_id}")
        self.task_id = task_id


class TaskList:
    """
    In-memory, newest-first task collection owned by the list screen.

    Ids are unique: inserting an id that is already present raises
    DuplicateTaskIdError and leaves the list unchanged.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = []
        for t in tasks or []:
            self.insert(len(self._tasks), t)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def snapshot(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def insert(self, index: int, task: Task) -> None:
        if task.id in self:
            raise DuplicateTaskIdError(task.id)
        self._tasks.insert(index, task)

    def prepend(self, task: Task) -> None:
        self.insert(0, task)

    def remove(self, task_id: str) -> tuple[int, Task] | None:
        """Remove by id. Returns (former index, task), or None if absent."""
        idx = self.index_of(task_id)
        if idx is None:
            return None
        return idx, self._tasks.pop(idx)
