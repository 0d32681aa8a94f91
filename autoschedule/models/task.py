"""
Task model definitions.

Tasks are created and edited by the task-CRUD collaborator; the scheduler
only reads them.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from autoschedule.models.enums import TaskPriority, TaskStatus


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: datetime
    estimated_duration: int = Field(..., ge=1, description="Estimated duration in minutes")
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    assigned_to: Optional[str] = None
    team_id: Optional[str] = None


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    pass


class Task(TaskBase):
    """Complete task model with all fields."""

    id: UUID
    created_by: str
    created_at: datetime
    updated_at: datetime


class TaskIntervalCreate(BaseModel):
    """Schema for splitting a task manually into an interval."""

    duration: int = Field(..., ge=1, description="Interval duration in minutes")
    scheduled_start: Optional[datetime] = None


class TaskInterval(TaskIntervalCreate):
    """A pre-existing piece of a task."""

    id: UUID
    task_id: UUID
    is_completed: bool = False
    created_at: datetime


class SchedulableTask(BaseModel):
    """A task together with its unfinished intervals."""

    task: Task
    intervals: list[TaskInterval] = Field(default_factory=list)
