"""
SQLite implementation of the schedule writer.

Entries and conflicts of one generation run are written in a single
transaction together with the removal of the previous generated schedule.
"""

from __future__ import annotations

from autoschedule.infrastructure.local.database import get_session_factory
from autoschedule.infrastructure.local.schedule_conflict_repository import conflict_to_orm
from autoschedule.infrastructure.local.schedule_entry_repository import (
    delete_unlocked_entries,
    entry_to_orm,
)
from autoschedule.interfaces.schedule_writer import IScheduleWriter
from autoschedule.models.schedule import ScheduleConflict, ScheduleEntry


class SqliteScheduleWriter(IScheduleWriter):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def replace_generated(
        self,
        user_id: str,
        entries: list[ScheduleEntry],
        conflicts: list[ScheduleConflict],
    ) -> int:
        async with self._session_factory() as session:
            async with session.begin():
                deleted = await delete_unlocked_entries(session, user_id)
                session.add_all([entry_to_orm(entry) for entry in entries])
                await session.flush()
                session.add_all([conflict_to_orm(conflict) for conflict in conflicts])
            return deleted
