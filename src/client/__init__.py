"""Client side of the task tracker: HTTP client and synchronised list view."""

from .api_client import TaskApiClient
from .view import TaskListView

__all__ = ["TaskApiClient", "TaskListView"]
