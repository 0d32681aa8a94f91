"""Abstract interfaces for infrastructure abstraction."""

from autoschedule.interfaces.auth_provider import IAuthProvider
from autoschedule.interfaces.personal_event_repository import IPersonalEventRepository
from autoschedule.interfaces.preference_repository import IPreferenceRepository
from autoschedule.interfaces.schedule_conflict_repository import IScheduleConflictRepository
from autoschedule.interfaces.schedule_entry_repository import IScheduleEntryRepository
from autoschedule.interfaces.schedule_writer import IScheduleWriter
from autoschedule.interfaces.task_repository import ITaskRepository

__all__ = [
    "IAuthProvider",
    "IPersonalEventRepository",
    "IPreferenceRepository",
    "IScheduleConflictRepository",
    "IScheduleEntryRepository",
    "IScheduleWriter",
    "ITaskRepository",
]
