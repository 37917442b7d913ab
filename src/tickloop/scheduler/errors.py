# src/tickloop/scheduler/errors.py

from __future__ import annotations

from .models import QueueTier, Task


class SchedulerError(Exception):
    """Base error for scheduler misuse."""


class TaskFailure(SchedulerError):
    """
    A queued task raised while executing.

    The original exception is chained as __cause__.
    """

    def __init__(self, task: Task) -> None:
        self.task_id = task.id
        self.task_name = task.name
        self.tier: QueueTier = task.tier
        super().__init__(f"Task {task.describe()} failed")
