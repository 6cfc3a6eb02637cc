"""Shared fixtures and fakes for task tracker tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import pytest

from src.tasks import Task, TaskNotFoundError, TaskRepository, TaskService, UNSET


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


class FakeTaskClient:
    """
    In-memory stand-in for TaskApiClient.

    - Records calls for assertions
    - ``fail_with`` makes the next call raise the given exception
    """

    def __init__(self, tasks: Optional[List[Task]] = None):
        self.tasks: List[Task] = list(tasks or [])
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: Optional[Exception] = None
        self.clock = StepClock()
        self._next_id = max((task.id for task in self.tasks), default=0) + 1

    def _check(self, name: str, args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            exc, self.fail_with = self.fail_with, None
            raise exc

    def list_tasks(self) -> List[Task]:
        self._check("list", None)
        return list(self.tasks)

    def create_task(self, title: str, description: Optional[str] = None) -> Task:
        self._check("create", (title, description))
        now = self.clock()
        task = Task(self._next_id, title.strip(), description, False, now, now)
        self._next_id += 1
        self.tasks.append(task)
        return task

    def update_task(self, task_id: int, *, title=None, description: Any = UNSET, completed=None) -> Task:
        self._check("update", (task_id, title, description, completed))
        current = next((task for task in self.tasks if task.id == task_id), None)
        if current is None:
            raise TaskNotFoundError(task_id)
        updated = Task(
            id=current.id,
            title=title if title is not None else current.title,
            description=current.description if description is UNSET else description,
            completed=current.completed if completed is None else completed,
            created_at=current.created_at,
            updated_at=self.clock(),
        )
        self.tasks = [updated if task.id == task_id else task for task in self.tasks]
        return updated

    def delete_task(self, task_id: int) -> bool:
        self._check("delete", task_id)
        before = len(self.tasks)
        self.tasks = [task for task in self.tasks if task.id != task_id]
        return len(self.tasks) < before


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def repo(tmp_path, clock) -> TaskRepository:
    """一時DBを使うTaskRepository"""
    return TaskRepository(tmp_path / "tasks.db", clock=clock)


@pytest.fixture
def service(repo) -> TaskService:
    return TaskService(repo)


@pytest.fixture
def fake_client() -> FakeTaskClient:
    return FakeTaskClient()
