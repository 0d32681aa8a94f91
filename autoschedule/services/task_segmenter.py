"""
Task segmentation.

Long tasks are broken into bounded pieces so that a single block never
exceeds the user's maximum task duration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from autoschedule.models.preferences import SchedulePreference
from autoschedule.models.task import SchedulableTask, Task

# Tasks longer than this are always split when auto-splitting is on.
HARD_SPLIT_THRESHOLD_MINUTES = 180


@dataclass(frozen=True)
class TaskSegment:
    """One placeable piece of a task."""

    task: Task
    duration: int
    index: int = 0
    count: int = 1
    interval_id: Optional[UUID] = None

    @property
    def title(self) -> str:
        if self.count > 1 or self.interval_id is not None:
            return f"{self.task.title} (Part {self.index + 1})"
        return self.task.title


def should_split(task: Task, preferences: SchedulePreference) -> bool:
    """Decide whether a task needs to be split into segments."""
    if not preferences.auto_split_long_tasks:
        return False
    duration = task.estimated_duration
    return (
        duration > preferences.max_task_duration
        or duration > HARD_SPLIT_THRESHOLD_MINUTES
    )


def split_duration(total: int, max_duration: int) -> list[int]:
    """
    Split a duration into near-equal pieces no longer than max_duration.

    The last piece takes only what remains, so pieces sum to `total`.
    """
    if total <= max_duration:
        return [total]
    count = math.ceil(total / max_duration)
    nominal = math.ceil(total / count)
    return [min(nominal, total - i * nominal) for i in range(count)]


def segment_task(item: SchedulableTask, preferences: SchedulePreference) -> list[TaskSegment]:
    """
    Produce the segments to place for a task.

    Unfinished intervals are scheduled as they are; otherwise the task is
    split when `should_split` says so, or placed whole.
    """
    task = item.task
    if item.intervals:
        count = len(item.intervals)
        return [
            TaskSegment(
                task=task,
                duration=interval.duration,
                index=i,
                count=count,
                interval_id=interval.id,
            )
            for i, interval in enumerate(item.intervals)
        ]

    if not should_split(task, preferences):
        return [TaskSegment(task=task, duration=task.estimated_duration)]

    durations = split_duration(task.estimated_duration, preferences.max_task_duration)
    return [
        TaskSegment(task=task, duration=duration, index=i, count=len(durations))
        for i, duration in enumerate(durations)
    ]
