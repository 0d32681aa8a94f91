"""
Quarter-hour index of blocked time.

Time is discretized into 15-minute buckets of local wall-clock time. A bucket
is blocked as soon as anything (personal event, locked entry, a segment placed
earlier in the same run) intersects it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Iterator, NamedTuple, Optional

from autoschedule.models.enums import BlockReason
from autoschedule.models.personal_event import PersonalEvent
from autoschedule.models.schedule import ScheduleEntry

BUCKET_MINUTES = 15
BUCKET = timedelta(minutes=BUCKET_MINUTES)


class BucketKey(NamedTuple):
    """Local date plus quarter-hour index within that day (0..95)."""

    day: date
    quarter: int


def floor_to_bucket(dt: datetime) -> datetime:
    """Round a datetime down to the start of its quarter hour."""
    return dt.replace(minute=dt.minute - dt.minute % BUCKET_MINUTES, second=0, microsecond=0)


class TimeBlockIndex:
    """Mapping of blocked quarter-hour buckets to the reason they are blocked."""

    def __init__(self, tz: tzinfo):
        self.tz = tz
        self._blocked: dict[BucketKey, BlockReason] = {}

    @classmethod
    def from_calendar(
        cls,
        tz: tzinfo,
        personal_events: Iterable[PersonalEvent] = (),
        locked_entries: Iterable[ScheduleEntry] = (),
    ) -> "TimeBlockIndex":
        """Build an index seeded with a user's immutable blocked time."""
        index = cls(tz)
        for event in personal_events:
            index.mark_blocked(event.start_time, event.end_time, BlockReason.PERSONAL_EVENT)
        for entry in locked_entries:
            index.mark_blocked(entry.start_time, entry.end_time, BlockReason.LOCKED_ENTRY)
        return index

    def key_for(self, dt: datetime) -> BucketKey:
        local = dt.astimezone(self.tz)
        return BucketKey(local.date(), (local.hour * 60 + local.minute) // BUCKET_MINUTES)

    def _buckets(self, start: datetime, end: datetime) -> Iterator[BucketKey]:
        """Yield every bucket intersecting [start, end)."""
        current = floor_to_bucket(start.astimezone(self.tz))
        end = end.astimezone(self.tz)
        while current < end:
            yield self.key_for(current)
            current += BUCKET

    def mark_blocked(self, start: datetime, end: datetime, reason: BlockReason) -> list[BucketKey]:
        """
        Block every bucket intersecting [start, end).

        Returns:
            Keys that were newly blocked by this call
        """
        added = []
        for key in self._buckets(start, end):
            if key not in self._blocked:
                self._blocked[key] = reason
                added.append(key)
        return added

    def release(self, keys: Iterable[BucketKey]) -> None:
        """Unblock keys previously returned by mark_blocked."""
        for key in keys:
            self._blocked.pop(key, None)

    def is_free(self, start: datetime, end: datetime, buffer_minutes: int = 0) -> bool:
        """True iff no bucket of [start - buffer, end + buffer) is blocked."""
        padding = timedelta(minutes=buffer_minutes)
        return not any(
            key in self._blocked for key in self._buckets(start - padding, end + padding)
        )

    def reason_at(self, dt: datetime) -> Optional[BlockReason]:
        return self._blocked.get(self.key_for(dt))

    def __contains__(self, key: BucketKey) -> bool:
        return key in self._blocked

    def __len__(self) -> int:
        return len(self._blocked)
