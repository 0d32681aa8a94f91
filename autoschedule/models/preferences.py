"""
Scheduling preference models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from autoschedule.models.enums import EfficiencyCurve
from autoschedule.utils.datetime_utils import is_valid_hhmm

DEFAULT_WORK_START = "09:00"
DEFAULT_WORK_END = "17:00"
DEFAULT_BUFFER_MINUTES = 30
DEFAULT_MAX_TASK_DURATION = 180
DEFAULT_BREAK_DURATION = 15


class SchedulePreference(BaseModel):
    id: UUID
    user_id: str
    auto_split_long_tasks: bool = True
    max_task_duration: int = DEFAULT_MAX_TASK_DURATION
    break_duration: int = DEFAULT_BREAK_DURATION
    work_buffer_minutes: int = DEFAULT_BUFFER_MINUTES
    preferred_work_start: str = DEFAULT_WORK_START
    preferred_work_end: str = DEFAULT_WORK_END
    allow_weekend_scheduling: bool = False
    efficiency_curve: EfficiencyCurve = EfficiencyCurve.NORMAL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SchedulePreferenceUpdate(BaseModel):
    """Partial preference update; only supplied fields are merged."""

    auto_split_long_tasks: Optional[bool] = None
    max_task_duration: Optional[int] = Field(None, ge=1)
    break_duration: Optional[int] = Field(None, ge=0)
    work_buffer_minutes: Optional[int] = Field(None, ge=0)
    preferred_work_start: Optional[str] = None
    preferred_work_end: Optional[str] = None
    allow_weekend_scheduling: Optional[bool] = None
    efficiency_curve: Optional[EfficiencyCurve] = None

    @field_validator("preferred_work_start", "preferred_work_end")
    @classmethod
    def _check_time_of_day(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_valid_hhmm(value):
            raise ValueError("must be a 24h time in HH:MM format")
        return value
