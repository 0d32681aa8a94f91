"""
Personal event repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from autoschedule.models.personal_event import PersonalEvent, PersonalEventCreate


class IPersonalEventRepository(ABC):
    @abstractmethod
    async def create(self, user_id: str, event: PersonalEventCreate) -> PersonalEvent:
        pass

    @abstractmethod
    async def get(self, user_id: str, event_id: UUID) -> Optional[PersonalEvent]:
        pass

    @abstractmethod
    async def list(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[PersonalEvent]:
        """
        List a user's events ordered by start time.

        When both bounds are given, only events whose start or end falls
        within [start, end] are returned.
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, event_id: UUID) -> bool:
        pass
