"""
Schedule models: entries, conflicts and generation inputs/outputs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from autoschedule.models.enums import ConflictType, TaskPriority


class ScheduleEntry(BaseModel):
    """A placed block of work on the user's calendar."""

    id: UUID
    task_id: UUID
    interval_id: Optional[UUID] = None
    user_id: str
    start_time: datetime
    end_time: datetime
    title: str
    priority: TaskPriority
    is_manual: bool = False
    is_locked: bool = False
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_range(self) -> "ScheduleEntry":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self

    @property
    def duration_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60

    @property
    def survives_regeneration(self) -> bool:
        return self.is_locked or self.is_manual


class ScheduleEntryUpdate(BaseModel):
    """Manual edit of an entry (move, lock, mark manual)."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_locked: Optional[bool] = None
    is_manual: Optional[bool] = None


class ScheduleConflict(BaseModel):
    """An anomaly recorded alongside the computed schedule."""

    id: UUID
    user_id: str
    schedule_entry_id: Optional[UUID] = None
    conflict_type: ConflictType
    conflict_details: str
    is_resolved: bool = False
    resolution_action: Optional[str] = None
    created_at: Optional[datetime] = None


class ConflictResolution(BaseModel):
    resolution_action: Optional[str] = Field(None, max_length=1000)


class ScheduleGenerationOptions(BaseModel):
    """
    Options accepted by schedule generation.

    Only `respect_personal_events` changes placement; the remaining flags are
    accepted for compatibility and carried through unchanged.
    """

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    respect_personal_events: bool = True
    allow_manual_override: bool = True
    prioritize_urgent_tasks: bool = True
    optimize_for_efficiency: bool = True


class ScheduleStats(BaseModel):
    total_tasks: int = 0
    scheduled_tasks: int = 0
    total_duration: float = 0
    average_task_duration: float = 0


class ScheduleGenerationResult(BaseModel):
    schedule_entries: list[ScheduleEntry] = Field(default_factory=list)
    conflicts: list[ScheduleConflict] = Field(default_factory=list)
    stats: ScheduleStats = Field(default_factory=ScheduleStats)
    message: str = ""
