"""
tickloop: a deterministic cooperative scheduler.

Three tiers of queued work (microtasks, timers, low-priority tasks) drained in
strict priority order by an explicitly constructed CooperativeScheduler.
"""

from .scheduler import (
    CooperativeScheduler,
    DrainStats,
    QueueTier,
    SchedulerError,
    Task,
    TaskFailure,
    TimerHandle,
    run_until_idle,
    schedule_chain,
)

__version__ = "0.1.0"

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
