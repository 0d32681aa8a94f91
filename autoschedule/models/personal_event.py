"""
Personal event models.

Personal events are blocked time owned by the user (appointments, holidays).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class PersonalEventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    start_time: datetime
    end_time: datetime
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    event_type: str = "personal"

    @model_validator(mode="after")
    def _check_range(self) -> "PersonalEventCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class PersonalEvent(PersonalEventCreate):
    id: UUID
    user_id: str
    created_at: Optional[datetime] = None
