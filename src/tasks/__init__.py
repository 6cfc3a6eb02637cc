"""Task storage and CRUD operations shared by the server, CLI and client."""

from .exceptions import TaskError, TaskNotFoundError, TaskValidationError
from .models import Task
from .repository import TaskRepository, UNSET
from .service import TaskService

__all__ = [
    "Task",
    "TaskError",
    "TaskNotFoundError",
    "TaskValidationError",
    "TaskRepository",
    "TaskService",
    "UNSET",
]
