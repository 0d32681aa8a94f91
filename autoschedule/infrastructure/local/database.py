"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
Datetimes are stored as naive UTC.
"""

from datetime import datetime
from functools import lru_cache
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from autoschedule.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class TaskORM(Base):
    """Task ORM model."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=False)
    estimated_duration = Column(Integer, nullable=False)
    priority = Column(String(10), default="medium")
    status = Column(String(20), default="todo", index=True)
    assigned_to = Column(String(255), nullable=True, index=True)
    team_id = Column(String(36), nullable=True)
    created_by = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class TaskIntervalORM(Base):
    """Manual sub-split of a task."""

    __tablename__ = "task_intervals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    scheduled_start = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class ScheduleEntryORM(Base):
    """Placed schedule entry."""

    __tablename__ = "schedule_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    task_id = Column(String(36), nullable=False, index=True)
    interval_id = Column(String(36), nullable=True)
    user_id = Column(String(255), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    title = Column(String(500), nullable=False)
    priority = Column(String(10), nullable=False)
    is_manual = Column(Boolean, default=False)
    is_locked = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class ScheduleConflictORM(Base):
    """Conflict recorded during generation."""

    __tablename__ = "schedule_conflicts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    schedule_entry_id = Column(String(36), nullable=True)
    conflict_type = Column(String(30), nullable=False)
    conflict_details = Column(Text, nullable=True)
    is_resolved = Column(Boolean, default=False, index=True)
    resolution_action = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class UserPreferenceORM(Base):
    """Per-user scheduling preferences."""

    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, unique=True)
    auto_split_long_tasks = Column(Boolean, default=True)
    max_task_duration = Column(Integer, default=180)
    break_duration = Column(Integer, default=15)
    work_buffer_minutes = Column(Integer, default=30)
    preferred_work_start = Column(String(5), default="09:00")
    preferred_work_end = Column(String(5), default="17:00")
    allow_weekend_scheduling = Column(Boolean, default=False)
    efficiency_curve = Column(String(20), default="normal")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PersonalEventORM(Base):
    """User-owned blocked time."""

    __tablename__ = "personal_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    is_recurring = Column(Boolean, default=False)
    recurrence_pattern = Column(String(255), nullable=True)
    event_type = Column(String(30), default="personal")
    created_at = Column(DateTime, default=datetime.utcnow)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables and apply pending migrations."""
    from autoschedule.infrastructure.local.migrations import run_migrations

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await run_migrations(engine)
