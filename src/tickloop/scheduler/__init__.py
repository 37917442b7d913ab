"""
Scheduler subsystem.

Components:
- models.py: data structures (QueueTier, Task, TimerEntry, TimerHandle, DrainStats)
- engine.py: CooperativeScheduler with its priority-tiered drain loop
- chain.py: promise-style continuation chains built on microtasks
- runner.py: asyncio-friendly drain for embedding in an event loop
- errors.py: SchedulerError, TaskFailure
"""

from .chain import schedule_chain
from .engine import CooperativeScheduler
from .errors import SchedulerError, TaskFailure
from .models import DrainStats, QueueTier, Task, TimerHandle
from .runner import run_until_idle

__all__ = [
    "CooperativeScheduler",
    "DrainStats",
    "QueueTier",
    "SchedulerError",
    "Task",
    "TaskFailure",
    "TimerHandle",
    "run_until_idle",
    "schedule_chain",
]
