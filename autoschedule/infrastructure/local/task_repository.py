"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, case, delete, or_, select

from autoschedule.core.exceptions import NotFoundError
from autoschedule.infrastructure.local.database import (
    ScheduleEntryORM,
    TaskIntervalORM,
    TaskORM,
    get_session_factory,
)
from autoschedule.interfaces.task_repository import ITaskRepository
from autoschedule.models.enums import TaskPriority, TaskStatus
from autoschedule.models.task import (
    SchedulableTask,
    Task,
    TaskCreate,
    TaskInterval,
    TaskIntervalCreate,
)
from autoschedule.utils.datetime_utils import ensure_utc, now_utc, to_naive_utc

_PRIORITY_ORDER = case(
    (TaskORM.priority == TaskPriority.URGENT.value, 4),
    (TaskORM.priority == TaskPriority.HIGH.value, 3),
    (TaskORM.priority == TaskPriority.MEDIUM.value, 2),
    (TaskORM.priority == TaskPriority.LOW.value, 1),
    else_=0,
)


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        return Task(
            id=UUID(orm.id),
            title=orm.title,
            description=orm.description,
            due_date=ensure_utc(orm.due_date),
            estimated_duration=orm.estimated_duration,
            priority=TaskPriority(orm.priority),
            status=TaskStatus(orm.status),
            assigned_to=orm.assigned_to,
            team_id=orm.team_id,
            created_by=orm.created_by,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _interval_to_model(self, orm: TaskIntervalORM) -> TaskInterval:
        return TaskInterval(
            id=UUID(orm.id),
            task_id=UUID(orm.task_id),
            duration=orm.duration,
            scheduled_start=ensure_utc(orm.scheduled_start),
            is_completed=bool(orm.is_completed),
            created_at=ensure_utc(orm.created_at),
        )

    @staticmethod
    def _visible_to(user_id: str):
        return or_(TaskORM.created_by == user_id, TaskORM.assigned_to == user_id)

    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            now = to_naive_utc(now_utc())
            orm = TaskORM(
                id=str(uuid4()),
                title=task.title,
                description=task.description,
                due_date=to_naive_utc(task.due_date),
                estimated_duration=task.estimated_duration,
                priority=task.priority.value,
                status=task.status.value,
                assigned_to=task.assigned_to,
                team_id=task.team_id,
                created_by=user_id,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id == str(task_id)))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def update_status(self, user_id: str, task_id: UUID, status: TaskStatus) -> Task:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM).where(
                    and_(TaskORM.id == str(task_id), self._visible_to(user_id))
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"Task {task_id} not found")

            orm.status = status.value
            orm.updated_at = to_naive_utc(now_utc())
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """Delete a task together with its intervals and schedule entries."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM).where(
                    and_(TaskORM.id == str(task_id), TaskORM.created_by == user_id)
                )
            )
            orm = result.scalar_one_or_none()

            if not orm:
                return False

            await session.execute(
                delete(ScheduleEntryORM).where(ScheduleEntryORM.task_id == str(task_id))
            )
            await session.execute(
                delete(TaskIntervalORM).where(TaskIntervalORM.task_id == str(task_id))
            )
            await session.delete(orm)
            await session.commit()
            return True

    async def add_interval(self, task_id: UUID, interval: TaskIntervalCreate) -> TaskInterval:
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM.id).where(TaskORM.id == str(task_id)))
            if result.scalar_one_or_none() is None:
                raise NotFoundError(f"Task {task_id} not found")

            orm = TaskIntervalORM(
                id=str(uuid4()),
                task_id=str(task_id),
                duration=interval.duration,
                scheduled_start=to_naive_utc(interval.scheduled_start),
                is_completed=False,
                created_at=to_naive_utc(now_utc()),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._interval_to_model(orm)

    async def list_incomplete(self, user_id: str) -> list[SchedulableTask]:
        """List schedulable tasks in scheduling priority order."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(
                    and_(
                        self._visible_to(user_id),
                        TaskORM.status != TaskStatus.COMPLETED.value,
                    )
                )
                .order_by(
                    _PRIORITY_ORDER.desc(),
                    TaskORM.due_date.asc(),
                    TaskORM.created_at.asc(),
                    TaskORM.id.asc(),
                )
            )
            tasks = [self._orm_to_model(orm) for orm in result.scalars().all()]
            if not tasks:
                return []

            interval_result = await session.execute(
                select(TaskIntervalORM)
                .where(
                    and_(
                        TaskIntervalORM.task_id.in_([str(task.id) for task in tasks]),
                        TaskIntervalORM.is_completed.is_(False),
                    )
                )
                .order_by(TaskIntervalORM.created_at.asc(), TaskIntervalORM.id.asc())
            )
            intervals_by_task: dict[UUID, list[TaskInterval]] = defaultdict(list)
            for orm in interval_result.scalars().all():
                interval = self._interval_to_model(orm)
                intervals_by_task[interval.task_id].append(interval)

            return [
                SchedulableTask(task=task, intervals=intervals_by_task.get(task.id, []))
                for task in tasks
            ]
