"""
SQLite implementation of schedule conflict repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, select

from autoschedule.core.exceptions import NotFoundError
from autoschedule.infrastructure.local.database import ScheduleConflictORM, get_session_factory
from autoschedule.interfaces.schedule_conflict_repository import IScheduleConflictRepository
from autoschedule.models.enums import ConflictType
from autoschedule.models.schedule import ScheduleConflict
from autoschedule.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc


def conflict_to_orm(conflict: ScheduleConflict) -> ScheduleConflictORM:
    return ScheduleConflictORM(
        id=str(conflict.id),
        user_id=conflict.user_id,
        schedule_entry_id=str(conflict.schedule_entry_id) if conflict.schedule_entry_id else None,
        conflict_type=conflict.conflict_type.value,
        conflict_details=conflict.conflict_details,
        is_resolved=conflict.is_resolved,
        resolution_action=conflict.resolution_action,
        created_at=to_naive_utc(conflict.created_at or now_utc()),
    )


class SqliteScheduleConflictRepository(IScheduleConflictRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ScheduleConflictORM) -> ScheduleConflict:
        return ScheduleConflict(
            id=UUID(orm.id),
            user_id=orm.user_id,
            schedule_entry_id=UUID(orm.schedule_entry_id) if orm.schedule_entry_id else None,
            conflict_type=ConflictType(orm.conflict_type),
            conflict_details=orm.conflict_details or "",
            is_resolved=bool(orm.is_resolved),
            resolution_action=orm.resolution_action,
            created_at=ensure_utc(orm.created_at),
        )

    async def _get_orm(self, session, user_id: str, conflict_id: UUID) -> Optional[ScheduleConflictORM]:
        result = await session.execute(
            select(ScheduleConflictORM).where(
                and_(
                    ScheduleConflictORM.id == str(conflict_id),
                    ScheduleConflictORM.user_id == user_id,
                )
            )
        )
        return result.scalar_one_or_none()

    async def create_many(self, conflicts: list[ScheduleConflict]) -> None:
        if not conflicts:
            return
        async with self._session_factory() as session:
            session.add_all([conflict_to_orm(conflict) for conflict in conflicts])
            await session.commit()

    async def get(self, user_id: str, conflict_id: UUID) -> Optional[ScheduleConflict]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, conflict_id)
            return self._orm_to_model(orm) if orm else None

    async def list_unresolved(self, user_id: str) -> list[ScheduleConflict]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleConflictORM)
                .where(
                    and_(
                        ScheduleConflictORM.user_id == user_id,
                        ScheduleConflictORM.is_resolved.is_(False),
                    )
                )
                .order_by(ScheduleConflictORM.created_at.desc(), ScheduleConflictORM.id.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def resolve(
        self, user_id: str, conflict_id: UUID, resolution_action: str
    ) -> ScheduleConflict:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, conflict_id)
            if not orm:
                raise NotFoundError(f"Conflict {conflict_id} not found")

            if not orm.is_resolved:
                orm.is_resolved = True
                orm.resolution_action = resolution_action
                await session.commit()
                await session.refresh(orm)
            return self._orm_to_model(orm)
