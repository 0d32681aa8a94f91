"""
Collects the conflicts of one generation run.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from autoschedule.models.enums import ConflictType
from autoschedule.models.schedule import ScheduleConflict
from autoschedule.models.task import Task
from autoschedule.utils.datetime_utils import now_utc


class ConflictRecorder:
    """Flat, append-only list of conflicts for a single user and run."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        self.conflicts: list[ScheduleConflict] = []

    def _record(
        self,
        conflict_type: ConflictType,
        details: str,
        schedule_entry_id: Optional[UUID] = None,
    ) -> ScheduleConflict:
        conflict = ScheduleConflict(
            id=uuid4(),
            user_id=self.user_id,
            schedule_entry_id=schedule_entry_id,
            conflict_type=conflict_type,
            conflict_details=details,
            is_resolved=False,
            created_at=now_utc(),
        )
        self.conflicts.append(conflict)
        return conflict

    def no_available_slot(self, task: Task, duration: int) -> ScheduleConflict:
        return self._record(
            ConflictType.NO_AVAILABLE_SLOT,
            f'Cannot find suitable time slot for task "{task.title}" ({duration} minutes)',
        )

    def deadline_miss(self, task: Task, schedule_entry_id: UUID) -> ScheduleConflict:
        return self._record(
            ConflictType.DEADLINE_MISS,
            f'Task "{task.title}" scheduled after due date',
            schedule_entry_id=schedule_entry_id,
        )

    def scheduling_error(self, task: Task, error: Exception) -> ScheduleConflict:
        return self._record(
            ConflictType.SCHEDULING_ERROR,
            f'Failed to schedule task "{task.title}": {error}',
        )
