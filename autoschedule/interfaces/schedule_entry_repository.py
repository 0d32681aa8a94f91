"""
Schedule entry repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from autoschedule.models.schedule import ScheduleEntry, ScheduleEntryUpdate


class IScheduleEntryRepository(ABC):
    """Abstract interface for schedule entry persistence."""

    @abstractmethod
    async def list(self, user_id: str) -> list[ScheduleEntry]:
        """List all entries of a user ordered by start time."""
        pass

    @abstractmethod
    async def list_locked(self, user_id: str) -> list[ScheduleEntry]:
        """List entries that are locked or manual, ordered by start time."""
        pass

    @abstractmethod
    async def get(self, user_id: str, entry_id: UUID) -> Optional[ScheduleEntry]:
        pass

    @abstractmethod
    async def create_many(self, entries: list[ScheduleEntry]) -> None:
        pass

    @abstractmethod
    async def update(
        self, user_id: str, entry_id: UUID, update: ScheduleEntryUpdate
    ) -> ScheduleEntry:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the entry does not exist or belongs to another user
        """
        pass

    @abstractmethod
    async def delete_unlocked(self, user_id: str) -> int:
        """Delete entries that are neither locked nor manual; returns the count."""
        pass
