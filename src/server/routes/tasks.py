"""Task endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import FastAPI, HTTPException

from src.tasks import TaskNotFoundError, TaskValidationError, UNSET

from ..dependencies import get_task_service, serialize_task
from ..schemas import (
    TaskCreateRequest,
    TaskDeleteResponse,
    TaskResponse,
    TaskUpdateRequest,
)

logger = logging.getLogger(__name__)


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD endpoints."""

    @app.get("/api/tasks", response_model=List[TaskResponse])
    async def list_tasks() -> List[TaskResponse]:
        """List tasks in the configured order (insertion order by default)."""
        service = get_task_service()
        try:
            tasks = await asyncio.to_thread(service.list)
            return [serialize_task(task) for task in tasks]
        except Exception as exc:
            logger.exception("Failed to list tasks: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list tasks") from exc

    @app.post("/api/tasks", response_model=TaskResponse)
    async def create_task(request: TaskCreateRequest) -> TaskResponse:
        """Create a new task."""
        service = get_task_service()
        try:
            task = await asyncio.to_thread(service.create, request.title, request.description)
            return serialize_task(task)
        except TaskValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to create task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create task") from exc

    @app.get("/api/tasks/{task_id}", response_model=TaskResponse)
    async def get_task(task_id: int) -> TaskResponse:
        """Fetch a single task."""
        service = get_task_service()
        try:
            task = await asyncio.to_thread(service.get, task_id)
            return serialize_task(task)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Task not found") from exc
        except Exception as exc:
            logger.exception("Failed to get task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to get task") from exc

    @app.patch("/api/tasks/{task_id}", response_model=TaskResponse)
    async def update_task(task_id: int, request: TaskUpdateRequest) -> TaskResponse:
        """Update only the supplied fields of an existing task."""
        service = get_task_service()
        payload = request.model_dump(exclude_unset=True)
        try:
            task = await asyncio.to_thread(
                lambda: service.update(
                    task_id,
                    title=payload.get("title"),
                    description=payload["description"] if "description" in payload else UNSET,
                    completed=payload.get("completed"),
                )
            )
            return serialize_task(task)
        except TaskNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Task not found") from exc
        except TaskValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update task") from exc

    @app.delete("/api/tasks/{task_id}", response_model=TaskDeleteResponse)
    async def delete_task(task_id: int) -> TaskDeleteResponse:
        """Delete a task. A missing id is reported as ``success: false``."""
        service = get_task_service()
        try:
            deleted = await asyncio.to_thread(service.delete, task_id)
            return TaskDeleteResponse(success=deleted)
        except Exception as exc:
            logger.exception("Failed to delete task: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete task") from exc
