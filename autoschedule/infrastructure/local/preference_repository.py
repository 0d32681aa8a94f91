"""
SQLite implementation of schedule preference repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from autoschedule.infrastructure.local.database import UserPreferenceORM, get_session_factory
from autoschedule.interfaces.preference_repository import IPreferenceRepository
from autoschedule.models.enums import EfficiencyCurve
from autoschedule.models.preferences import (
    DEFAULT_BREAK_DURATION,
    DEFAULT_BUFFER_MINUTES,
    DEFAULT_MAX_TASK_DURATION,
    DEFAULT_WORK_END,
    DEFAULT_WORK_START,
    SchedulePreference,
    SchedulePreferenceUpdate,
)
from autoschedule.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc


class SqlitePreferenceRepository(IPreferenceRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserPreferenceORM) -> SchedulePreference:
        return SchedulePreference(
            id=UUID(orm.id),
            user_id=orm.user_id,
            auto_split_long_tasks=bool(orm.auto_split_long_tasks),
            max_task_duration=orm.max_task_duration,
            break_duration=orm.break_duration,
            work_buffer_minutes=orm.work_buffer_minutes,
            preferred_work_start=orm.preferred_work_start,
            preferred_work_end=orm.preferred_work_end,
            allow_weekend_scheduling=bool(orm.allow_weekend_scheduling),
            efficiency_curve=EfficiencyCurve(orm.efficiency_curve),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _select(self, session, user_id: str) -> Optional[UserPreferenceORM]:
        result = await session.execute(
            select(UserPreferenceORM).where(UserPreferenceORM.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _insert_defaults(self, session, user_id: str) -> None:
        now = to_naive_utc(now_utc())
        stmt = (
            sqlite_insert(UserPreferenceORM)
            .values(
                id=str(uuid4()),
                user_id=user_id,
                auto_split_long_tasks=True,
                max_task_duration=DEFAULT_MAX_TASK_DURATION,
                break_duration=DEFAULT_BREAK_DURATION,
                work_buffer_minutes=DEFAULT_BUFFER_MINUTES,
                preferred_work_start=DEFAULT_WORK_START,
                preferred_work_end=DEFAULT_WORK_END,
                allow_weekend_scheduling=False,
                efficiency_curve=EfficiencyCurve.NORMAL.value,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        await session.execute(stmt)

    async def get(self, user_id: str) -> Optional[SchedulePreference]:
        async with self._session_factory() as session:
            orm = await self._select(session, user_id)
            return self._orm_to_model(orm) if orm else None

    async def get_or_create(self, user_id: str) -> SchedulePreference:
        async with self._session_factory() as session:
            orm = await self._select(session, user_id)
            if orm is None:
                await self._insert_defaults(session, user_id)
                await session.commit()
                orm = await self._select(session, user_id)
            return self._orm_to_model(orm)

    async def update(self, user_id: str, update: SchedulePreferenceUpdate) -> SchedulePreference:
        async with self._session_factory() as session:
            await self._insert_defaults(session, user_id)
            orm = await self._select(session, user_id)

            update_data = update.model_dump(exclude_unset=True, exclude_none=True)
            for field, value in update_data.items():
                if hasattr(value, "value"):  # Enum
                    value = value.value
                setattr(orm, field, value)
            orm.updated_at = to_naive_utc(now_utc())

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
