"""
Greedy earliest-fit slot search.

Walks day by day through the scheduling window and, inside each working day,
tries start times in 15-minute steps until one is free (including the
buffer on both sides) in the time block index.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo
from typing import Optional

from autoschedule.core.logger import setup_logger
from autoschedule.models.enums import EfficiencyCurve, TaskPriority
from autoschedule.models.preferences import SchedulePreference
from autoschedule.services.time_block_index import BUCKET, TimeBlockIndex
from autoschedule.utils.datetime_utils import parse_hhmm

logger = setup_logger(__name__)

SATURDAY = 5


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime

    @property
    def minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60


class SlotFinder:
    """
    Finds the earliest feasible slot for a segment.

    The finder reads the block index but never writes to it; the caller marks
    a slot once it accepts it.
    """

    def __init__(self, preferences: SchedulePreference, index: TimeBlockIndex, tz: tzinfo):
        self.preferences = preferences
        self.index = index
        self.tz = tz

    def find_slot(
        self,
        duration: int,
        window_start: datetime,
        window_end: datetime,
        priority: Optional[TaskPriority] = None,
        due_date: Optional[datetime] = None,
    ) -> Optional[TimeSlot]:
        """
        Find the first free slot of `duration` minutes inside the window.

        Args:
            duration: Segment length in minutes
            window_start: First day considered (its time of day is ignored)
            window_end: Search stops once the cursor passes this instant
            priority: Segment priority (reserved for efficiency ordering)
            due_date: Segment deadline (reserved for efficiency ordering)

        Returns:
            The slot, or None when the window has no room for the segment

        Raises:
            ValueError: On a non-positive duration or malformed work hours
        """
        if duration <= 0:
            raise ValueError(f"Segment duration must be positive, got {duration}")

        work_start = parse_hhmm(self.preferences.preferred_work_start)
        work_end = parse_hhmm(self.preferences.preferred_work_end)
        buffer_minutes = self.preferences.work_buffer_minutes
        length = timedelta(minutes=duration)

        cursor = self._at(window_start.astimezone(self.tz), work_start)
        window_end = window_end.astimezone(self.tz)

        while cursor <= window_end:
            if not self.preferences.allow_weekend_scheduling and cursor.weekday() >= SATURDAY:
                cursor = self._next_day(cursor, work_start)
                continue

            day_end = self._at(cursor, work_end)
            slot = self._find_slot_in_day(cursor, day_end, length, buffer_minutes)
            if slot:
                return self.optimize_for_efficiency(slot, self.preferences.efficiency_curve)

            cursor = self._next_day(cursor, work_start)

        logger.debug(f"No slot of {duration} min before {window_end.isoformat()}")
        return None

    def _find_slot_in_day(
        self,
        day_start: datetime,
        day_end: datetime,
        length: timedelta,
        buffer_minutes: int,
    ) -> Optional[TimeSlot]:
        candidate = day_start
        while candidate + length <= day_end:
            end = candidate + length
            if self.index.is_free(candidate, end, buffer_minutes):
                return TimeSlot(start=candidate, end=end)
            candidate += BUCKET
        return None

    def optimize_for_efficiency(self, slot: TimeSlot, curve: EfficiencyCurve) -> TimeSlot:
        """
        Adjust a slot to the user's efficiency curve.

        Every curve currently keeps the earliest-fit slot unchanged.
        """
        return slot

    def _at(self, day: datetime, time_of_day: time) -> datetime:
        return datetime.combine(day.date(), time_of_day, tzinfo=self.tz)

    def _next_day(self, cursor: datetime, work_start: time) -> datetime:
        return self._at(cursor + timedelta(days=1), work_start)
