"""
Task repository interface.

Defines the contract for reading the tasks the scheduler places.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from autoschedule.models.enums import TaskStatus
from autoschedule.models.task import (
    SchedulableTask,
    Task,
    TaskCreate,
    TaskInterval,
    TaskIntervalCreate,
)


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            user_id: Creator user ID
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def get(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        pass

    @abstractmethod
    async def update_status(self, user_id: str, task_id: UUID, status: TaskStatus) -> Task:
        """
        Change the status of a task created by or assigned to the user.

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """
        Delete a task created by the user along with its schedule entries.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def add_interval(self, task_id: UUID, interval: TaskIntervalCreate) -> TaskInterval:
        """
        Attach a manual sub-split to a task.

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def list_incomplete(self, user_id: str) -> list[SchedulableTask]:
        """
        List non-completed tasks created by or assigned to the user.

        Each item carries the task's unfinished intervals. Results are ordered
        by priority (urgent first), due date, then creation time.
        """
        pass
