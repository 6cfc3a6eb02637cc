"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from src.task_tracker.config import Config
from src.task_tracker.logger import setup_logger
from src.tasks import Task, TaskRepository, TaskService

from .schemas import TaskResponse

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=str(config.resolve_log_file()))


@lru_cache(maxsize=1)
def get_task_service() -> TaskService:
    """Singleton TaskService bound to the configured database."""
    repository = TaskRepository(
        config.resolve_database_path(),
        list_order=config.tasks.list_order,
    )
    return TaskService(repository)


def serialize_task(task: Task) -> TaskResponse:
    """Convert domain Task to API response."""
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        completed=task.completed,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
