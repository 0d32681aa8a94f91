"""
Schedule API endpoints.

Generation, manual entry edits, conflicts, preferences and personal events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException, Query, status

from autoschedule.api.deps import CurrentUser, ScheduleServiceDep
from autoschedule.core.exceptions import NotFoundError, ValidationError
from autoschedule.models.personal_event import PersonalEvent, PersonalEventCreate
from autoschedule.models.preferences import SchedulePreference, SchedulePreferenceUpdate
from autoschedule.models.schedule import (
    ConflictResolution,
    ScheduleConflict,
    ScheduleEntry,
    ScheduleEntryUpdate,
    ScheduleGenerationOptions,
    ScheduleGenerationResult,
)

router = APIRouter()


@router.post("", response_model=ScheduleGenerationResult)
async def generate_schedule(
    user: CurrentUser,
    service: ScheduleServiceDep,
    options: Optional[ScheduleGenerationOptions] = Body(None),
):
    """Generate a new schedule, replacing unlocked entries."""
    return await service.generate_schedule(user.id, options)


@router.get("", response_model=list[ScheduleEntry])
async def list_schedule_entries(user: CurrentUser, service: ScheduleServiceDep):
    return await service.list_schedule_entries(user.id)


@router.put("/entry/{entry_id}", response_model=ScheduleEntry)
async def update_schedule_entry(
    entry_id: UUID,
    payload: ScheduleEntryUpdate,
    user: CurrentUser,
    service: ScheduleServiceDep,
):
    """Move, lock or mark an entry as manual."""
    try:
        return await service.update_schedule_entry(entry_id, user.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.get("/conflicts", response_model=list[ScheduleConflict])
async def list_conflicts(user: CurrentUser, service: ScheduleServiceDep):
    return await service.list_unresolved_conflicts(user.id)


@router.put("/conflicts/{conflict_id}/resolve", response_model=ScheduleConflict)
async def resolve_conflict(
    conflict_id: UUID,
    user: CurrentUser,
    service: ScheduleServiceDep,
    payload: Optional[ConflictResolution] = Body(None),
):
    action = payload.resolution_action if payload else None
    try:
        return await service.resolve_conflict(user.id, conflict_id, action)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/preferences", response_model=SchedulePreference)
async def get_preferences(user: CurrentUser, service: ScheduleServiceDep):
    return await service.get_preferences(user.id)


@router.put("/preferences", response_model=SchedulePreference)
async def update_preferences(
    payload: SchedulePreferenceUpdate,
    user: CurrentUser,
    service: ScheduleServiceDep,
):
    return await service.update_preferences(user.id, payload)


@router.post("/events", response_model=PersonalEvent, status_code=status.HTTP_201_CREATED)
async def add_personal_event(
    payload: PersonalEventCreate,
    user: CurrentUser,
    service: ScheduleServiceDep,
):
    return await service.add_personal_event(user.id, payload)


@router.get("/events", response_model=list[PersonalEvent])
async def list_personal_events(
    user: CurrentUser,
    service: ScheduleServiceDep,
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
):
    return await service.list_personal_events(user.id, start=start_date, end=end_date)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_personal_event(
    event_id: UUID,
    user: CurrentUser,
    service: ScheduleServiceDep,
):
    try:
        await service.delete_personal_event(user.id, event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
