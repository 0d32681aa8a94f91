"""
SQLite implementation of schedule entry repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from autoschedule.core.exceptions import NotFoundError, ValidationError
from autoschedule.infrastructure.local.database import ScheduleEntryORM, get_session_factory
from autoschedule.interfaces.schedule_entry_repository import IScheduleEntryRepository
from autoschedule.models.enums import TaskPriority
from autoschedule.models.schedule import ScheduleEntry, ScheduleEntryUpdate
from autoschedule.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc


def entry_to_orm(entry: ScheduleEntry) -> ScheduleEntryORM:
    """Build an ORM row from a computed entry."""
    return ScheduleEntryORM(
        id=str(entry.id),
        task_id=str(entry.task_id),
        interval_id=str(entry.interval_id) if entry.interval_id else None,
        user_id=entry.user_id,
        start_time=to_naive_utc(entry.start_time),
        end_time=to_naive_utc(entry.end_time),
        title=entry.title,
        priority=entry.priority.value,
        is_manual=entry.is_manual,
        is_locked=entry.is_locked,
        created_at=to_naive_utc(entry.created_at or now_utc()),
    )


async def delete_unlocked_entries(session: AsyncSession, user_id: str) -> int:
    """Delete a user's entries that are neither locked nor manual."""
    result = await session.execute(
        delete(ScheduleEntryORM).where(
            and_(
                ScheduleEntryORM.user_id == user_id,
                ScheduleEntryORM.is_locked.is_(False),
                ScheduleEntryORM.is_manual.is_(False),
            )
        )
    )
    return result.rowcount or 0


class SqliteScheduleEntryRepository(IScheduleEntryRepository):
    """SQLite implementation of schedule entry repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ScheduleEntryORM) -> ScheduleEntry:
        return ScheduleEntry(
            id=UUID(orm.id),
            task_id=UUID(orm.task_id),
            interval_id=UUID(orm.interval_id) if orm.interval_id else None,
            user_id=orm.user_id,
            start_time=ensure_utc(orm.start_time),
            end_time=ensure_utc(orm.end_time),
            title=orm.title,
            priority=TaskPriority(orm.priority),
            is_manual=bool(orm.is_manual),
            is_locked=bool(orm.is_locked),
            created_at=ensure_utc(orm.created_at),
        )

    async def list(self, user_id: str) -> list[ScheduleEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM)
                .where(ScheduleEntryORM.user_id == user_id)
                .order_by(ScheduleEntryORM.start_time.asc(), ScheduleEntryORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_locked(self, user_id: str) -> list[ScheduleEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM)
                .where(
                    and_(
                        ScheduleEntryORM.user_id == user_id,
                        or_(
                            ScheduleEntryORM.is_locked.is_(True),
                            ScheduleEntryORM.is_manual.is_(True),
                        ),
                    )
                )
                .order_by(ScheduleEntryORM.start_time.asc(), ScheduleEntryORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def get(self, user_id: str, entry_id: UUID) -> Optional[ScheduleEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM).where(
                    and_(ScheduleEntryORM.id == str(entry_id), ScheduleEntryORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def create_many(self, entries: list[ScheduleEntry]) -> None:
        if not entries:
            return
        async with self._session_factory() as session:
            session.add_all([entry_to_orm(entry) for entry in entries])
            await session.commit()

    async def update(
        self, user_id: str, entry_id: UUID, update: ScheduleEntryUpdate
    ) -> ScheduleEntry:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM).where(
                    and_(ScheduleEntryORM.id == str(entry_id), ScheduleEntryORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()

            if not orm:
                raise NotFoundError(f"Schedule entry {entry_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None:
                    continue
                if field in ("start_time", "end_time"):
                    value = to_naive_utc(value)
                setattr(orm, field, value)

            if orm.start_time >= orm.end_time:
                await session.rollback()
                raise ValidationError(
                    "Schedule entry start must be before its end",
                    details={"entry_id": str(entry_id)},
                )

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete_unlocked(self, user_id: str) -> int:
        async with self._session_factory() as session:
            deleted = await delete_unlocked_entries(session, user_id)
            await session.commit()
            return deleted
