"""
Seed demo data for local development.

Usage:
    python -m scripts.seed_demo_data            # Dry-run (shows what will be created)
    python -m scripts.seed_demo_data --apply    # Insert data and generate a schedule

Requires: ENVIRONMENT=local in .env
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Suppress noisy SQLAlchemy logs during seed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Ensure project root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from autoschedule.api.deps import get_schedule_service, get_task_repository
from autoschedule.core.config import get_settings
from autoschedule.infrastructure.local.database import init_db
from autoschedule.models.enums import TaskPriority
from autoschedule.models.personal_event import PersonalEventCreate
from autoschedule.models.task import TaskCreate

USER_ID = "dev_user"
NOW = datetime.now(timezone.utc)
TODAY = NOW.replace(hour=0, minute=0, second=0, microsecond=0)


def _tasks() -> list[TaskCreate]:
    return [
        TaskCreate(
            title="Quarterly report",
            description="Numbers, charts and the summary page",
            due_date=TODAY + timedelta(days=3, hours=17),
            estimated_duration=240,
            priority=TaskPriority.HIGH,
        ),
        TaskCreate(
            title="Fix login bug",
            due_date=TODAY + timedelta(days=1, hours=12),
            estimated_duration=90,
            priority=TaskPriority.URGENT,
        ),
        TaskCreate(
            title="Review pull requests",
            due_date=TODAY + timedelta(days=2, hours=17),
            estimated_duration=60,
            priority=TaskPriority.MEDIUM,
        ),
        TaskCreate(
            title="Clean up backlog",
            due_date=TODAY + timedelta(days=10),
            estimated_duration=45,
            priority=TaskPriority.LOW,
        ),
    ]


def _events() -> list[PersonalEventCreate]:
    return [
        PersonalEventCreate(
            title="Dentist",
            start_time=TODAY + timedelta(days=1, hours=13),
            end_time=TODAY + timedelta(days=1, hours=14),
        ),
    ]


def _print_plan() -> None:
    print(f"\nTasks ({len(_tasks())}) for {USER_ID}:")
    for task in _tasks():
        print(
            f"  - [{task.priority.value:6s}] {task.title} "
            f"({task.estimated_duration} min, due {task.due_date:%Y-%m-%d %H:%M})"
        )

    print(f"\nPersonal events ({len(_events())}):")
    for event in _events():
        print(f"  - {event.title} {event.start_time:%Y-%m-%d %H:%M}-{event.end_time:%H:%M}")

    print("\nRun with --apply to insert the data")


async def seed(dry_run: bool = True) -> None:
    settings = get_settings()
    if not settings.is_local:
        print(f"Refusing to seed in {settings.ENVIRONMENT} environment")
        return

    if dry_run:
        _print_plan()
        return

    await init_db()
    task_repo = get_task_repository()
    service = get_schedule_service()

    for task in _tasks():
        created = await task_repo.create(USER_ID, task)
        print(f"Created task {created.title} ({created.id})")

    for event in _events():
        created = await service.add_personal_event(USER_ID, event)
        print(f"Created personal event {created.title} ({created.id})")

    result = await service.generate_schedule(USER_ID)
    print(f"\n{result.message}")
    for entry in result.schedule_entries:
        print(f"  {entry.start_time:%a %H:%M}-{entry.end_time:%H:%M}  {entry.title}")
    for conflict in result.conflicts:
        print(f"  ! {conflict.conflict_type.value}: {conflict.conflict_details}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo tasks and generate a schedule.")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually insert data. Default is dry-run.",
    )
    args = parser.parse_args()
    asyncio.run(seed(dry_run=not args.apply))


if __name__ == "__main__":
    main()
