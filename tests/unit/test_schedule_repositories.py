"""
Unit tests for the SQLite schedule repositories.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm.exc import FlushError

from autoschedule.core.exceptions import NotFoundError, ValidationError
from autoschedule.infrastructure.local.migrations import run_migrations
from autoschedule.infrastructure.local.personal_event_repository import (
    SqlitePersonalEventRepository,
)
from autoschedule.infrastructure.local.preference_repository import SqlitePreferenceRepository
from autoschedule.infrastructure.local.schedule_conflict_repository import (
    SqliteScheduleConflictRepository,
)
from autoschedule.infrastructure.local.schedule_entry_repository import (
    SqliteScheduleEntryRepository,
)
from autoschedule.infrastructure.local.schedule_writer import SqliteScheduleWriter
from autoschedule.infrastructure.local.task_repository import SqliteTaskRepository
from autoschedule.models.enums import ConflictType, EfficiencyCurve, TaskPriority, TaskStatus
from autoschedule.models.personal_event import PersonalEventCreate
from autoschedule.models.preferences import SchedulePreferenceUpdate
from autoschedule.models.schedule import ScheduleConflict, ScheduleEntry, ScheduleEntryUpdate
from autoschedule.models.task import TaskCreate, TaskIntervalCreate

UTC = timezone.utc
BASE = datetime(2026, 10, 19, 9, 0, tzinfo=UTC)


def make_entry(user_id: str, start_hour: int, **overrides) -> ScheduleEntry:
    data = dict(
        id=uuid4(),
        task_id=uuid4(),
        user_id=user_id,
        start_time=BASE.replace(hour=start_hour),
        end_time=BASE.replace(hour=start_hour + 1),
        title=f"Entry {start_hour}",
        priority=TaskPriority.MEDIUM,
        created_at=BASE,
    )
    data.update(overrides)
    return ScheduleEntry(**data)


def new_task(title: str, due_date: datetime, **overrides) -> TaskCreate:
    return TaskCreate(title=title, due_date=due_date, estimated_duration=30, **overrides)


def make_conflict(user_id: str) -> ScheduleConflict:
    return ScheduleConflict(
        id=uuid4(),
        user_id=user_id,
        conflict_type=ConflictType.NO_AVAILABLE_SLOT,
        conflict_details="Cannot find suitable time slot",
        created_at=BASE,
    )


# ===========================================
# Tasks
# ===========================================


@pytest.mark.asyncio
async def test_list_incomplete_orders_by_priority_due_and_creation(
    session_factory, test_user_id
):
    repo = SqliteTaskRepository(session_factory=session_factory)
    soon, later = BASE + timedelta(days=1), BASE + timedelta(days=5)

    specs = [
        ("Low", soon, TaskPriority.LOW),
        ("High later", later, TaskPriority.HIGH),
        ("High soon", soon, TaskPriority.HIGH),
        ("Urgent", later, TaskPriority.URGENT),
    ]
    low, high_later, high_soon, urgent = [
        await repo.create(test_user_id, new_task(title, due, priority=priority))
        for title, due, priority in specs
    ]

    items = await repo.list_incomplete(test_user_id)

    assert [item.task.id for item in items] == [urgent.id, high_soon.id, high_later.id, low.id]


@pytest.mark.asyncio
async def test_list_incomplete_includes_assigned_and_skips_completed(
    session_factory, test_user_id
):
    repo = SqliteTaskRepository(session_factory=session_factory)
    due = BASE + timedelta(days=1)

    assigned = await repo.create(
        "manager", new_task("Delegated", due, assigned_to=test_user_id)
    )
    done = await repo.create(test_user_id, new_task("Done", due))
    await repo.update_status(test_user_id, done.id, TaskStatus.COMPLETED)
    await repo.create("someone_else", new_task("Not mine", due))

    items = await repo.list_incomplete(test_user_id)

    assert [item.task.id for item in items] == [assigned.id]
    assert items[0].task.due_date == due


@pytest.mark.asyncio
async def test_list_incomplete_attaches_unfinished_intervals(session_factory, test_user_id):
    repo = SqliteTaskRepository(session_factory=session_factory)
    task = await repo.create(
        test_user_id, TaskCreate(title="Split", due_date=BASE, estimated_duration=120)
    )
    first = await repo.add_interval(task.id, TaskIntervalCreate(duration=60))
    second = await repo.add_interval(task.id, TaskIntervalCreate(duration=60))

    [item] = await repo.list_incomplete(test_user_id)

    assert [interval.id for interval in item.intervals] == [first.id, second.id]


@pytest.mark.asyncio
async def test_add_interval_to_missing_task_raises(session_factory):
    repo = SqliteTaskRepository(session_factory=session_factory)

    with pytest.raises(NotFoundError):
        await repo.add_interval(uuid4(), TaskIntervalCreate(duration=30))


@pytest.mark.asyncio
async def test_delete_task_removes_its_entries(session_factory, test_user_id):
    task_repo = SqliteTaskRepository(session_factory=session_factory)
    entry_repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    task = await task_repo.create(
        test_user_id, TaskCreate(title="Gone", due_date=BASE, estimated_duration=60)
    )
    await entry_repo.create_many([make_entry(test_user_id, 9, task_id=task.id, is_locked=True)])

    assert await task_repo.delete(test_user_id, task.id) is True

    assert await task_repo.get(task.id) is None
    assert await entry_repo.list(test_user_id) == []
    assert await task_repo.delete(test_user_id, task.id) is False


# ===========================================
# Entries
# ===========================================


@pytest.mark.asyncio
async def test_list_locked_returns_locked_and_manual(session_factory, test_user_id):
    repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    locked = make_entry(test_user_id, 9, is_locked=True)
    manual = make_entry(test_user_id, 11, is_manual=True)
    generated = make_entry(test_user_id, 13)
    await repo.create_many([generated, manual, locked])

    result = await repo.list_locked(test_user_id)

    assert [entry.id for entry in result] == [locked.id, manual.id]
    assert result[0].start_time == BASE


@pytest.mark.asyncio
async def test_delete_unlocked_keeps_locked_and_manual(session_factory, test_user_id):
    repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    await repo.create_many(
        [
            make_entry(test_user_id, 9, is_locked=True),
            make_entry(test_user_id, 11, is_manual=True),
            make_entry(test_user_id, 13),
            make_entry("other_user", 13),
        ]
    )

    deleted = await repo.delete_unlocked(test_user_id)

    assert deleted == 1
    assert len(await repo.list(test_user_id)) == 2
    assert len(await repo.list("other_user")) == 1


@pytest.mark.asyncio
async def test_update_entry_partial(session_factory, test_user_id):
    repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    entry = make_entry(test_user_id, 9)
    await repo.create_many([entry])

    updated = await repo.update(test_user_id, entry.id, ScheduleEntryUpdate(is_locked=True))

    assert updated.is_locked is True
    assert updated.is_manual is False
    assert updated.start_time == entry.start_time
    assert updated.end_time == entry.end_time


@pytest.mark.asyncio
async def test_update_entry_rejects_inverted_range(session_factory, test_user_id):
    repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    entry = make_entry(test_user_id, 9)
    await repo.create_many([entry])

    with pytest.raises(ValidationError):
        await repo.update(
            test_user_id, entry.id, ScheduleEntryUpdate(start_time=BASE.replace(hour=12))
        )

    stored = await repo.get(test_user_id, entry.id)
    assert stored.start_time == entry.start_time


@pytest.mark.asyncio
async def test_update_entry_not_found(session_factory, test_user_id):
    repo = SqliteScheduleEntryRepository(session_factory=session_factory)

    with pytest.raises(NotFoundError):
        await repo.update(test_user_id, uuid4(), ScheduleEntryUpdate(is_manual=True))


# ===========================================
# Writer
# ===========================================


@pytest.mark.asyncio
async def test_replace_generated_swaps_entries_and_adds_conflicts(
    session_factory, test_user_id
):
    entry_repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    conflict_repo = SqliteScheduleConflictRepository(session_factory=session_factory)
    writer = SqliteScheduleWriter(session_factory=session_factory)
    locked = make_entry(test_user_id, 9, is_locked=True)
    await entry_repo.create_many([locked, make_entry(test_user_id, 11)])

    fresh = make_entry(test_user_id, 14)
    deleted = await writer.replace_generated(test_user_id, [fresh], [make_conflict(test_user_id)])

    assert deleted == 1
    assert {e.id for e in await entry_repo.list(test_user_id)} == {locked.id, fresh.id}
    assert len(await conflict_repo.list_unresolved(test_user_id)) == 1


@pytest.mark.asyncio
async def test_replace_generated_rolls_back_on_failure(session_factory, test_user_id):
    entry_repo = SqliteScheduleEntryRepository(session_factory=session_factory)
    conflict_repo = SqliteScheduleConflictRepository(session_factory=session_factory)
    writer = SqliteScheduleWriter(session_factory=session_factory)
    previous = make_entry(test_user_id, 11)
    await entry_repo.create_many([previous])

    duplicate = make_entry(test_user_id, 14)
    with pytest.raises((IntegrityError, FlushError)):
        await writer.replace_generated(
            test_user_id,
            [duplicate, duplicate.model_copy(update={"title": "Copy"})],
            [make_conflict(test_user_id)],
        )

    assert [e.id for e in await entry_repo.list(test_user_id)] == [previous.id]
    assert await conflict_repo.list_unresolved(test_user_id) == []


# ===========================================
# Conflicts
# ===========================================


@pytest.mark.asyncio
async def test_resolve_conflict_is_idempotent(session_factory, test_user_id):
    repo = SqliteScheduleConflictRepository(session_factory=session_factory)
    conflict = make_conflict(test_user_id)
    await repo.create_many([conflict])

    first = await repo.resolve(test_user_id, conflict.id, "Moved to Friday")
    second = await repo.resolve(test_user_id, conflict.id, "Ignored")

    assert first.is_resolved is True
    assert second.resolution_action == "Moved to Friday"
    assert await repo.list_unresolved(test_user_id) == []


@pytest.mark.asyncio
async def test_resolve_conflict_of_other_user_raises(session_factory, test_user_id):
    repo = SqliteScheduleConflictRepository(session_factory=session_factory)
    conflict = make_conflict(test_user_id)
    await repo.create_many([conflict])

    with pytest.raises(NotFoundError):
        await repo.resolve("intruder", conflict.id, "Manual resolution")


# ===========================================
# Preferences
# ===========================================


@pytest.mark.asyncio
async def test_get_or_create_is_stable(session_factory, test_user_id):
    repo = SqlitePreferenceRepository(session_factory=session_factory)

    assert await repo.get(test_user_id) is None
    created = await repo.get_or_create(test_user_id)
    again = await repo.get_or_create(test_user_id)

    assert created.id == again.id
    assert created.efficiency_curve == EfficiencyCurve.NORMAL
    assert created.break_duration == 15


@pytest.mark.asyncio
async def test_update_preferences_merges_supplied_fields(session_factory, test_user_id):
    repo = SqlitePreferenceRepository(session_factory=session_factory)
    await repo.get_or_create(test_user_id)

    updated = await repo.update(
        test_user_id,
        SchedulePreferenceUpdate(
            preferred_work_start="08:30",
            allow_weekend_scheduling=True,
            efficiency_curve=EfficiencyCurve.MORNING,
        ),
    )

    assert updated.preferred_work_start == "08:30"
    assert updated.preferred_work_end == "17:00"
    assert updated.allow_weekend_scheduling is True
    assert updated.efficiency_curve == EfficiencyCurve.MORNING


@pytest.mark.asyncio
async def test_update_preferences_creates_missing_row(session_factory, test_user_id):
    repo = SqlitePreferenceRepository(session_factory=session_factory)

    updated = await repo.update(test_user_id, SchedulePreferenceUpdate(max_task_duration=90))

    assert updated.max_task_duration == 90
    assert updated.work_buffer_minutes == 30


def test_preference_update_rejects_bad_time():
    with pytest.raises(PydanticValidationError):
        SchedulePreferenceUpdate(preferred_work_end="25:00")


# ===========================================
# Personal events
# ===========================================


@pytest.mark.asyncio
async def test_list_events_in_range(session_factory, test_user_id):
    repo = SqlitePersonalEventRepository(session_factory=session_factory)
    inside = await repo.create(
        test_user_id,
        PersonalEventCreate(
            title="Lunch", start_time=BASE.replace(hour=12), end_time=BASE.replace(hour=13)
        ),
    )
    straddling = await repo.create(
        test_user_id,
        PersonalEventCreate(
            title="Trip", start_time=BASE - timedelta(days=2), end_time=BASE + timedelta(hours=1)
        ),
    )
    await repo.create(
        test_user_id,
        PersonalEventCreate(
            title="Next month",
            start_time=BASE + timedelta(days=40),
            end_time=BASE + timedelta(days=40, hours=1),
        ),
    )

    events = await repo.list(test_user_id, start=BASE, end=BASE + timedelta(days=7))

    assert [e.id for e in events] == [straddling.id, inside.id]


def test_personal_event_requires_end_after_start():
    with pytest.raises(PydanticValidationError):
        PersonalEventCreate(title="Backwards", start_time=BASE, end_time=BASE)


# ===========================================
# Migrations
# ===========================================


@pytest.mark.asyncio
async def test_run_migrations_adds_lock_columns(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'legacy.db'}")
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE schedule_entries ("
                "id VARCHAR(36) PRIMARY KEY, task_id VARCHAR(36), user_id VARCHAR(255), "
                "start_time DATETIME, end_time DATETIME, title VARCHAR(500), priority VARCHAR(10))"
            )
        )

    await run_migrations(engine)
    await run_migrations(engine)

    async with engine.connect() as conn:
        result = await conn.execute(text("PRAGMA table_info(schedule_entries)"))
        columns = {row[1] for row in result}
    await engine.dispose()

    assert {"is_manual", "is_locked"} <= columns
