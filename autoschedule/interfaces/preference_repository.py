"""
Schedule preference repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from autoschedule.models.preferences import SchedulePreference, SchedulePreferenceUpdate


class IPreferenceRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> Optional[SchedulePreference]:
        pass

    @abstractmethod
    async def get_or_create(self, user_id: str) -> SchedulePreference:
        """Return the user's preferences, atomically creating defaults if missing."""
        pass

    @abstractmethod
    async def update(self, user_id: str, update: SchedulePreferenceUpdate) -> SchedulePreference:
        """Merge the supplied fields into the user's preferences."""
        pass
