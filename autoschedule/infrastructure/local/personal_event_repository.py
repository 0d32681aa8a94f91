"""
SQLite implementation of personal event repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, or_, select

from autoschedule.infrastructure.local.database import PersonalEventORM, get_session_factory
from autoschedule.interfaces.personal_event_repository import IPersonalEventRepository
from autoschedule.models.personal_event import PersonalEvent, PersonalEventCreate
from autoschedule.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc


class SqlitePersonalEventRepository(IPersonalEventRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: PersonalEventORM) -> PersonalEvent:
        return PersonalEvent(
            id=UUID(orm.id),
            user_id=orm.user_id,
            title=orm.title,
            description=orm.description,
            start_time=ensure_utc(orm.start_time),
            end_time=ensure_utc(orm.end_time),
            is_recurring=bool(orm.is_recurring),
            recurrence_pattern=orm.recurrence_pattern,
            event_type=orm.event_type or "personal",
            created_at=ensure_utc(orm.created_at),
        )

    async def create(self, user_id: str, event: PersonalEventCreate) -> PersonalEvent:
        async with self._session_factory() as session:
            orm = PersonalEventORM(
                id=str(uuid4()),
                user_id=user_id,
                title=event.title,
                description=event.description,
                start_time=to_naive_utc(event.start_time),
                end_time=to_naive_utc(event.end_time),
                is_recurring=event.is_recurring,
                recurrence_pattern=event.recurrence_pattern,
                event_type=event.event_type,
                created_at=to_naive_utc(now_utc()),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, event_id: UUID) -> Optional[PersonalEvent]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PersonalEventORM).where(
                    and_(PersonalEventORM.id == str(event_id), PersonalEventORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[PersonalEvent]:
        async with self._session_factory() as session:
            query = select(PersonalEventORM).where(PersonalEventORM.user_id == user_id)

            if start is not None and end is not None:
                lower, upper = to_naive_utc(start), to_naive_utc(end)
                query = query.where(
                    or_(
                        PersonalEventORM.start_time.between(lower, upper),
                        PersonalEventORM.end_time.between(lower, upper),
                    )
                )

            query = query.order_by(PersonalEventORM.start_time.asc())
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def delete(self, user_id: str, event_id: UUID) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PersonalEventORM).where(
                    and_(PersonalEventORM.id == str(event_id), PersonalEventORM.user_id == user_id)
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
