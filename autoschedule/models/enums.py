"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Numeric rank used for scheduling order (urgent=4 ... low=1)."""
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    TaskPriority.URGENT: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class EfficiencyCurve(str, Enum):
    """
    Time-of-day productivity pattern of a user.

    Stored and exposed through preferences; placement does not use it yet.
    """

    NORMAL = "normal"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class ConflictType(str, Enum):
    """Kind of anomaly recorded during schedule generation."""

    NO_AVAILABLE_SLOT = "no_available_slot"
    DEADLINE_MISS = "deadline_miss"
    SCHEDULING_ERROR = "scheduling_error"
    OVERLAP = "overlap"


class BlockReason(str, Enum):
    """Why a time bucket is unavailable."""

    PERSONAL_EVENT = "personal_event"
    LOCKED_ENTRY = "locked_entry"
    SCHEDULED_TASK = "scheduled_task"
