"""
Loads the tasks to schedule in scheduling priority order.
"""

from __future__ import annotations

from autoschedule.interfaces.task_repository import ITaskRepository
from autoschedule.models.task import SchedulableTask


def scheduling_order_key(item: SchedulableTask) -> tuple:
    """Priority desc, then due date asc, then creation time asc, then id."""
    task = item.task
    return (-task.priority.rank, task.due_date, task.created_at, str(task.id))


class TaskSource:
    def __init__(self, task_repo: ITaskRepository):
        self.task_repo = task_repo

    async def incomplete_tasks(self, user_id: str) -> list[SchedulableTask]:
        """
        Non-completed tasks created by or assigned to the user.

        The repository already orders its results; sorting again keeps the
        order total and independent of the storage backend.
        """
        items = await self.task_repo.list_incomplete(user_id)
        return sorted(items, key=scheduling_order_key)
