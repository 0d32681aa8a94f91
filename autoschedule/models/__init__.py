"""Pydantic models for the scheduler domain."""

from autoschedule.models.enums import (
    BlockReason,
    ConflictType,
    EfficiencyCurve,
    TaskPriority,
    TaskStatus,
)
from autoschedule.models.personal_event import PersonalEvent, PersonalEventCreate
from autoschedule.models.preferences import SchedulePreference, SchedulePreferenceUpdate
from autoschedule.models.schedule import (
    ConflictResolution,
    ScheduleConflict,
    ScheduleEntry,
    ScheduleEntryUpdate,
    ScheduleGenerationOptions,
    ScheduleGenerationResult,
    ScheduleStats,
)
from autoschedule.models.task import (
    SchedulableTask,
    Task,
    TaskCreate,
    TaskInterval,
    TaskIntervalCreate,
)

__all__ = [
    "BlockReason",
    "ConflictType",
    "EfficiencyCurve",
    "TaskPriority",
    "TaskStatus",
    "PersonalEvent",
    "PersonalEventCreate",
    "SchedulePreference",
    "SchedulePreferenceUpdate",
    "ConflictResolution",
    "ScheduleConflict",
    "ScheduleEntry",
    "ScheduleEntryUpdate",
    "ScheduleGenerationOptions",
    "ScheduleGenerationResult",
    "ScheduleStats",
    "SchedulableTask",
    "Task",
    "TaskCreate",
    "TaskInterval",
    "TaskIntervalCreate",
]
