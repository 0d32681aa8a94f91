"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the SQLite
infrastructure implementations and the schedule service.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from autoschedule.core.config import get_settings
from autoschedule.interfaces.auth_provider import IAuthProvider, User
from autoschedule.interfaces.personal_event_repository import IPersonalEventRepository
from autoschedule.interfaces.preference_repository import IPreferenceRepository
from autoschedule.interfaces.schedule_conflict_repository import IScheduleConflictRepository
from autoschedule.interfaces.schedule_entry_repository import IScheduleEntryRepository
from autoschedule.interfaces.schedule_writer import IScheduleWriter
from autoschedule.interfaces.task_repository import ITaskRepository
from autoschedule.services.schedule_service import ScheduleService
from autoschedule.utils.datetime_utils import get_zone


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from autoschedule.infrastructure.local.task_repository import SqliteTaskRepository
    return SqliteTaskRepository()


@lru_cache()
def get_personal_event_repository() -> IPersonalEventRepository:
    """Get personal event repository instance."""
    from autoschedule.infrastructure.local.personal_event_repository import (
        SqlitePersonalEventRepository,
    )
    return SqlitePersonalEventRepository()


@lru_cache()
def get_schedule_entry_repository() -> IScheduleEntryRepository:
    """Get schedule entry repository instance."""
    from autoschedule.infrastructure.local.schedule_entry_repository import (
        SqliteScheduleEntryRepository,
    )
    return SqliteScheduleEntryRepository()


@lru_cache()
def get_schedule_conflict_repository() -> IScheduleConflictRepository:
    """Get schedule conflict repository instance."""
    from autoschedule.infrastructure.local.schedule_conflict_repository import (
        SqliteScheduleConflictRepository,
    )
    return SqliteScheduleConflictRepository()


@lru_cache()
def get_preference_repository() -> IPreferenceRepository:
    """Get preference repository instance."""
    from autoschedule.infrastructure.local.preference_repository import (
        SqlitePreferenceRepository,
    )
    return SqlitePreferenceRepository()


@lru_cache()
def get_schedule_writer() -> IScheduleWriter:
    """Get schedule writer instance."""
    from autoschedule.infrastructure.local.schedule_writer import SqliteScheduleWriter
    return SqliteScheduleWriter()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    from autoschedule.infrastructure.auth.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=get_settings().AUTH_ENABLED)


# ===========================================
# Services
# ===========================================


def get_schedule_service() -> ScheduleService:
    """Build the schedule service from the configured repositories."""
    settings = get_settings()
    return ScheduleService(
        task_repo=get_task_repository(),
        event_repo=get_personal_event_repository(),
        entry_repo=get_schedule_entry_repository(),
        conflict_repo=get_schedule_conflict_repository(),
        preference_repo=get_preference_repository(),
        writer=get_schedule_writer(),
        tz=get_zone(settings.SCHEDULE_TIMEZONE),
        window_days=settings.SCHEDULE_WINDOW_DAYS,
    )


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With auth disabled, returns the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    return await auth_provider.verify_token(token)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
