"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class TaskResponse(BaseModel):
    """Serialized task record."""

    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: datetime
    updated_at: datetime


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None)


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task. Omitted fields stay unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None)
    completed: Optional[bool] = Field(default=None)


class TaskDeleteResponse(BaseModel):
    """Response for delete endpoint; ``success`` is false when the id did not exist."""

    success: bool
