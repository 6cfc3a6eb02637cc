"""In-memory task list kept in sync with the server.

Each mutation is sent to the server first; the local list is only changed
with the record the server returns. A failed call leaves the list as it was.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from src.tasks import Task, TaskError

from .api_client import TaskApiClient

logger = logging.getLogger(__name__)

# Failures surfaced to the user instead of propagated
CLIENT_ERRORS = (TaskError, requests.RequestException)


class TaskListView:
    """Local task list mirroring the server state."""

    def __init__(self, client: TaskApiClient):
        self.client = client
        self.tasks: List[Task] = []
        self.last_error: Optional[Exception] = None

    def _fail(self, action: str, exc: Exception) -> None:
        logger.error("Failed to %s: %s", action, exc)
        self.last_error = exc

    def _find(self, task_id: int) -> Optional[Task]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def _replace(self, updated: Task) -> None:
        self.tasks = [updated if task.id == updated.id else task for task in self.tasks]

    def load(self) -> bool:
        """Replace the local list with the server's list."""
        try:
            self.tasks = self.client.list_tasks()
        except CLIENT_ERRORS as exc:
            self._fail("load tasks", exc)
            return False
        self.last_error = None
        return True

    def add(self, title: str, description: Optional[str] = None) -> Optional[Task]:
        if not title.strip():
            return None
        try:
            created = self.client.create_task(title, description or None)
        except CLIENT_ERRORS as exc:
            self._fail("create task", exc)
            return None
        self.tasks = [*self.tasks, created]
        self.last_error = None
        return created

    def toggle(self, task_id: int) -> Optional[Task]:
        task = self._find(task_id)
        if task is None:
            return None
        try:
            updated = self.client.update_task(task_id, completed=not task.completed)
        except CLIENT_ERRORS as exc:
            self._fail("toggle task", exc)
            return None
        self._replace(updated)
        self.last_error = None
        return updated

    def edit(self, task_id: int, title: str, description: Optional[str] = None) -> Optional[Task]:
        """Change title and description; an empty description clears it."""
        if self._find(task_id) is None or not title.strip():
            return None
        try:
            updated = self.client.update_task(
                task_id, title=title, description=description or None
            )
        except CLIENT_ERRORS as exc:
            self._fail("update task", exc)
            return None
        self._replace(updated)
        self.last_error = None
        return updated

    def remove(self, task_id: int) -> bool:
        try:
            self.client.delete_task(task_id)
        except CLIENT_ERRORS as exc:
            self._fail("delete task", exc)
            return False
        self.tasks = [task for task in self.tasks if task.id != task_id]
        self.last_error = None
        return True

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.completed)

    @property
    def total_count(self) -> int:
        return len(self.tasks)

    def render(self) -> List[str]:
        """Plain text lines for the console front end."""
        if not self.tasks:
            return ["No tasks yet."]
        lines = [f"{self.completed_count}/{self.total_count} completed"]
        for task in self.tasks:
            mark = "x" if task.completed else " "
            line = f"[{mark}] {task.id}: {task.title}"
            if task.description:
                line += f" - {task.description}"
            lines.append(line)
        return lines
