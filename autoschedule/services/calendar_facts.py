"""
Read-only calendar inputs of a generation run.

Personal events and locked/manual entries are time the scheduler must not
touch or move.
"""

from datetime import datetime

from autoschedule.interfaces.personal_event_repository import IPersonalEventRepository
from autoschedule.interfaces.schedule_entry_repository import IScheduleEntryRepository
from autoschedule.models.personal_event import PersonalEvent
from autoschedule.models.schedule import ScheduleEntry


class CalendarFacts:
    def __init__(
        self,
        entry_repo: IScheduleEntryRepository,
        event_repo: IPersonalEventRepository,
    ):
        self.entry_repo = entry_repo
        self.event_repo = event_repo

    async def locked_entries(self, user_id: str) -> list[ScheduleEntry]:
        """Entries that are locked or manual."""
        return await self.entry_repo.list_locked(user_id)

    async def personal_events(
        self, user_id: str, start: datetime, end: datetime
    ) -> list[PersonalEvent]:
        """Events whose start or end falls within [start, end]."""
        return await self.event_repo.list(user_id, start=start, end=end)
