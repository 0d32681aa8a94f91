"""
Summary statistics for a generated schedule.
"""

from typing import Sequence

from autoschedule.models.schedule import ScheduleEntry, ScheduleStats
from autoschedule.models.task import SchedulableTask


def calculate_stats(
    entries: Sequence[ScheduleEntry],
    tasks: Sequence[SchedulableTask],
) -> ScheduleStats:
    """
    Summarize a generation run.

    `scheduled_tasks` counts entries, so a task split into three segments
    contributes three.
    """
    total_duration = sum(entry.duration_minutes for entry in entries)
    return ScheduleStats(
        total_tasks=len(tasks),
        scheduled_tasks=len(entries),
        total_duration=total_duration,
        average_task_duration=total_duration / len(entries) if entries else 0,
    )
