"""
Schedule conflict repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from autoschedule.models.schedule import ScheduleConflict


class IScheduleConflictRepository(ABC):
    @abstractmethod
    async def create_many(self, conflicts: list[ScheduleConflict]) -> None:
        pass

    @abstractmethod
    async def get(self, user_id: str, conflict_id: UUID) -> Optional[ScheduleConflict]:
        pass

    @abstractmethod
    async def list_unresolved(self, user_id: str) -> list[ScheduleConflict]:
        """List unresolved conflicts, newest first."""
        pass

    @abstractmethod
    async def resolve(
        self, user_id: str, conflict_id: UUID, resolution_action: str
    ) -> ScheduleConflict:
        """
        Mark a conflict as resolved.

        Resolving an already resolved conflict leaves it untouched.

        Raises:
            NotFoundError: If the conflict does not exist for the user
        """
        pass
