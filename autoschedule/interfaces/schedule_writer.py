"""
Schedule writer interface.

Persists the outcome of one generation run as a single unit of work.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from autoschedule.models.schedule import ScheduleConflict, ScheduleEntry


class IScheduleWriter(ABC):
    @abstractmethod
    async def replace_generated(
        self,
        user_id: str,
        entries: list[ScheduleEntry],
        conflicts: list[ScheduleConflict],
    ) -> int:
        """
        Replace the user's generated schedule.

        Deletes every entry that is neither locked nor manual, then inserts
        the new entries and conflicts. Either all of it is committed or none.

        Returns:
            Number of deleted entries
        """
        pass
