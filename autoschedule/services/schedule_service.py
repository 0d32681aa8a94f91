"""
Schedule generation service.

Builds a conflict-aware schedule from a user's outstanding tasks, working
hour preferences, locked entries and personal events, and persists it.

Flow of one generation run:
    PreferenceStore -> TaskSource / CalendarFacts -> TimeBlockIndex (seeded)
    -> per task: segment, find slot, record conflicts
    -> ScheduleWriter (single transaction) -> stats
"""

from __future__ import annotations

import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from datetime import datetime, time, timedelta, tzinfo
from typing import AsyncIterator, Callable, Optional
from uuid import UUID, uuid4

from autoschedule.core.exceptions import NotFoundError
from autoschedule.core.logger import setup_logger
from autoschedule.interfaces.personal_event_repository import IPersonalEventRepository
from autoschedule.interfaces.preference_repository import IPreferenceRepository
from autoschedule.interfaces.schedule_conflict_repository import IScheduleConflictRepository
from autoschedule.interfaces.schedule_entry_repository import IScheduleEntryRepository
from autoschedule.interfaces.schedule_writer import IScheduleWriter
from autoschedule.interfaces.task_repository import ITaskRepository
from autoschedule.models.enums import BlockReason
from autoschedule.models.personal_event import PersonalEvent, PersonalEventCreate
from autoschedule.models.preferences import SchedulePreference, SchedulePreferenceUpdate
from autoschedule.models.schedule import (
    ScheduleConflict,
    ScheduleEntry,
    ScheduleEntryUpdate,
    ScheduleGenerationOptions,
    ScheduleGenerationResult,
)
from autoschedule.models.task import SchedulableTask
from autoschedule.services.calendar_facts import CalendarFacts
from autoschedule.services.conflict_recorder import ConflictRecorder
from autoschedule.services.preference_store import PreferenceStore
from autoschedule.services.schedule_stats import calculate_stats
from autoschedule.services.slot_finder import SlotFinder
from autoschedule.services.task_segmenter import segment_task
from autoschedule.services.task_source import TaskSource
from autoschedule.services.time_block_index import TimeBlockIndex
from autoschedule.utils.datetime_utils import UTC, ensure_utc, now_utc

logger = setup_logger(__name__)

DEFAULT_RESOLUTION_ACTION = "Manual resolution"
DEFAULT_WINDOW_DAYS = 30


class UserLockRegistry:
    """
    One asyncio.Lock per user, so generation runs never interleave.

    A user's lock is dropped once nobody holds or waits for it.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: Counter[str] = Counter()

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._users[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[user_id] -= 1
            if not self._users[user_id]:
                del self._users[user_id]
                del self._locks[user_id]

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every service instance in the process.
_generation_locks = UserLockRegistry()


class ScheduleService:
    """
    Service for automatic schedule generation and schedule maintenance.

    Provides:
    - Greedy earliest-fit schedule generation with conflict reporting
    - Manual entry edits (move, lock, mark manual)
    - Preference, conflict and personal event management
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        event_repo: IPersonalEventRepository,
        entry_repo: IScheduleEntryRepository,
        conflict_repo: IScheduleConflictRepository,
        preference_repo: IPreferenceRepository,
        writer: IScheduleWriter,
        tz: tzinfo = UTC,
        window_days: int = DEFAULT_WINDOW_DAYS,
        clock: Callable[[], datetime] = now_utc,
        locks: Optional[UserLockRegistry] = None,
    ):
        """
        Initialize schedule service.

        Args:
            tz: Zone in which preferred work hours are interpreted
            window_days: Default window length when no end date is given
            clock: Source of "now" for the default window
            locks: Per-user lock registry (defaults to the process-wide one)
        """
        self.entry_repo = entry_repo
        self.event_repo = event_repo
        self.conflict_repo = conflict_repo
        self.writer = writer
        self.preferences = PreferenceStore(preference_repo)
        self.task_source = TaskSource(task_repo)
        self.calendar = CalendarFacts(entry_repo, event_repo)
        self.tz = tz
        self.window_days = window_days
        self.clock = clock
        self.locks = locks or _generation_locks

    # ===========================================
    # Generation
    # ===========================================

    async def generate_schedule(
        self,
        user_id: str,
        options: Optional[ScheduleGenerationOptions] = None,
    ) -> ScheduleGenerationResult:
        """
        Generate and persist a schedule for a user.

        Unlocked, non-manual entries from earlier runs are replaced; locked
        and manual entries are kept and treated as blocked time.

        Raises:
            Any repository error; nothing is persisted in that case.
        """
        options = options or ScheduleGenerationOptions()
        window_start, window_end = self._resolve_window(options)

        async with self.locks.hold(user_id):
            prefs = await self.preferences.get(user_id)
            tasks = await self.task_source.incomplete_tasks(user_id)
            personal_events: list[PersonalEvent] = []
            if options.respect_personal_events:
                # The search starts on the first day's work start, which may
                # lie before window_start.
                events_from = datetime.combine(window_start.date(), time.min, tzinfo=self.tz)
                personal_events = await self.calendar.personal_events(
                    user_id, events_from, window_end
                )
            locked_entries = await self.calendar.locked_entries(user_id)

            index = TimeBlockIndex.from_calendar(self.tz, personal_events, locked_entries)
            entries, conflicts = self._place_tasks(
                user_id, tasks, prefs, index, window_start, window_end
            )

            deleted = await self.writer.replace_generated(user_id, entries, conflicts)

        stats = calculate_stats(entries, tasks)
        logger.info(
            f"Generated schedule for {user_id}: {len(entries)} entries, "
            f"{len(conflicts)} conflicts from {len(tasks)} tasks "
            f"({len(locked_entries)} locked kept, {deleted} replaced)"
        )
        return ScheduleGenerationResult(
            schedule_entries=entries,
            conflicts=conflicts,
            stats=stats,
            message=(
                f"Generated schedule with {len(entries)} entries "
                f"and {len(conflicts)} conflicts"
            ),
        )

    def _resolve_window(self, options: ScheduleGenerationOptions) -> tuple[datetime, datetime]:
        start = ensure_utc(options.start_date) or self.clock()
        end = ensure_utc(options.end_date) or start + timedelta(days=self.window_days)
        return start.astimezone(self.tz), end.astimezone(self.tz)

    def _place_tasks(
        self,
        user_id: str,
        tasks: list[SchedulableTask],
        prefs: SchedulePreference,
        index: TimeBlockIndex,
        window_start: datetime,
        window_end: datetime,
    ) -> tuple[list[ScheduleEntry], list[ScheduleConflict]]:
        finder = SlotFinder(prefs, index, self.tz)
        recorder = ConflictRecorder(user_id)
        entries: list[ScheduleEntry] = []

        for item in tasks:
            try:
                entries.extend(
                    self._schedule_task(
                        user_id, item, prefs, finder, index, recorder, window_start, window_end
                    )
                )
            except Exception as e:
                logger.exception(f"Failed to schedule task {item.task.id}")
                recorder.scheduling_error(item.task, e)

        return entries, recorder.conflicts

    def _schedule_task(
        self,
        user_id: str,
        item: SchedulableTask,
        prefs: SchedulePreference,
        finder: SlotFinder,
        index: TimeBlockIndex,
        recorder: ConflictRecorder,
        window_start: datetime,
        window_end: datetime,
    ) -> list[ScheduleEntry]:
        """
        Place every segment of one task.

        On an exception the buckets this task already claimed are released so
        the failed task leaves no trace in the index.
        """
        task = item.task
        due_date = ensure_utc(task.due_date)
        task_conflicts = ConflictRecorder(user_id)
        entries: list[ScheduleEntry] = []
        claimed = []

        try:
            for segment in segment_task(item, prefs):
                slot = finder.find_slot(
                    segment.duration,
                    window_start,
                    window_end,
                    priority=task.priority,
                    due_date=due_date,
                )
                if slot is None:
                    task_conflicts.no_available_slot(task, segment.duration)
                    continue

                entry = ScheduleEntry(
                    id=uuid4(),
                    task_id=task.id,
                    interval_id=segment.interval_id,
                    user_id=user_id,
                    start_time=slot.start.astimezone(UTC),
                    end_time=slot.end.astimezone(UTC),
                    title=segment.title,
                    priority=task.priority,
                    is_manual=False,
                    is_locked=False,
                    created_at=self.clock(),
                )
                claimed.extend(index.mark_blocked(slot.start, slot.end, BlockReason.SCHEDULED_TASK))
                entries.append(entry)

                if slot.end > due_date:
                    task_conflicts.deadline_miss(task, entry.id)
        except Exception:
            index.release(claimed)
            raise

        recorder.conflicts.extend(task_conflicts.conflicts)
        logger.debug(f"Task {task.id}: {len(entries)} segment(s) placed")
        return entries

    # ===========================================
    # Entries
    # ===========================================

    async def list_schedule_entries(self, user_id: str) -> list[ScheduleEntry]:
        return await self.entry_repo.list(user_id)

    async def update_schedule_entry(
        self, entry_id: UUID, user_id: str, update: ScheduleEntryUpdate
    ) -> ScheduleEntry:
        """
        Partially update an entry owned by the user.

        Raises:
            NotFoundError: If the entry does not belong to the user
            ValidationError: If the update leaves start at or after end
        """
        entry = await self.entry_repo.update(user_id, entry_id, update)
        logger.info(
            f"Updated schedule entry {entry_id} for {user_id} "
            f"(locked={entry.is_locked}, manual={entry.is_manual})"
        )
        return entry

    # ===========================================
    # Preferences
    # ===========================================

    async def get_preferences(self, user_id: str) -> SchedulePreference:
        return await self.preferences.get(user_id)

    async def update_preferences(
        self, user_id: str, update: SchedulePreferenceUpdate
    ) -> SchedulePreference:
        return await self.preferences.update(user_id, update)

    # ===========================================
    # Conflicts
    # ===========================================

    async def list_unresolved_conflicts(self, user_id: str) -> list[ScheduleConflict]:
        return await self.conflict_repo.list_unresolved(user_id)

    async def resolve_conflict(
        self,
        user_id: str,
        conflict_id: UUID,
        resolution_action: Optional[str] = None,
    ) -> ScheduleConflict:
        """
        Mark a conflict as resolved.

        Resolving an already resolved conflict returns it unchanged.

        Raises:
            NotFoundError: If the conflict does not belong to the user
        """
        return await self.conflict_repo.resolve(
            user_id, conflict_id, resolution_action or DEFAULT_RESOLUTION_ACTION
        )

    # ===========================================
    # Personal events
    # ===========================================

    async def add_personal_event(self, user_id: str, event: PersonalEventCreate) -> PersonalEvent:
        return await self.event_repo.create(user_id, event)

    async def list_personal_events(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[PersonalEvent]:
        return await self.event_repo.list(user_id, start=start, end=end)

    async def delete_personal_event(self, user_id: str, event_id: UUID) -> None:
        if not await self.event_repo.delete(user_id, event_id):
            raise NotFoundError(f"Personal event {event_id} not found")
