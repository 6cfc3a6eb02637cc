"""CRUD operations over the task table.

The service validates input and maps each call to exactly one repository
operation. It is shared by the HTTP routes and the CLI.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .exceptions import TaskNotFoundError, TaskValidationError
from .models import Task
from .repository import TaskRepository, UNSET

logger = logging.getLogger(__name__)


def _clean_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise TaskValidationError("title must not be empty")
    return title.strip()


class TaskService:
    """Validated create/list/get/update/delete operations."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def create(self, title: Optional[str], description: Optional[str] = None) -> Task:
        task = self.repository.create(_clean_title(title), description)
        logger.info("Created task id=%s", task.id)
        return task

    def list(self) -> List[Task]:
        return self.repository.list()

    def get(self, task_id: int) -> Task:
        task = self.repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        description: Any = UNSET,
        completed: Optional[bool] = None,
    ) -> Task:
        """Apply only the supplied fields; ``updated_at`` is always refreshed."""
        task = self.repository.update(
            task_id,
            title=_clean_title(title) if title is not None else None,
            description=description,
            completed=completed,
        )
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.info("Updated task id=%s", task_id)
        return task

    def delete(self, task_id: int) -> bool:
        deleted = self.repository.delete(task_id)
        if deleted:
            logger.info("Deleted task id=%s", task_id)
        else:
            logger.info("Delete requested for missing task id=%s", task_id)
        return deleted
