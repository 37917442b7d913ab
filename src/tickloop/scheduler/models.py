# src/tickloop/scheduler/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from ..core.ports import TaskCallback

if TYPE_CHECKING:
    from .engine import CooperativeScheduler


class QueueTier(StrEnum):
    """
    Queue a task was scheduled on.

    Declaration order is draining priority: microtasks first, then expired
    timers, then low-priority tasks.
    """

    MICROTASK = "microtask"
    TIMER = "timer"
    LOW_PRIORITY = "low_priority"


@dataclass(slots=True)
class Task:
    id: int
    callback: TaskCallback
    tier: QueueTier
    name: str

    def describe(self) -> str:
        return f"{self.tier.value}#{self.id} ({self.name})"


@dataclass(slots=True, order=True)
class TimerEntry:
    due_at: float
    seq: int
    task: Task = field(compare=False)
    delay: float = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    # Set once the entry leaves the pending set (popped for execution).
    popped: bool = field(default=False, compare=False)


@dataclass(slots=True, eq=False)
class TimerHandle:
    """
    Caller-side reference to a scheduled timer.

    cancel() is idempotent: it only has an effect while the timer is still pending.
    """

    _entry: TimerEntry
    _scheduler: CooperativeScheduler

    @property
    def task_id(self) -> int:
        return self._entry.task.id

    @property
    def delay(self) -> float:
        return self._entry.delay

    @property
    def due_at(self) -> float:
        return self._entry.due_at

    def cancel(self) -> bool:
        return self._scheduler.cancel_timer(self)

    def cancelled(self) -> bool:
        return self._entry.cancelled

    def done(self) -> bool:
        return self._entry.popped


@dataclass(slots=True)
class DrainStats:
    """Summary of one drain() call."""

    executed: dict[QueueTier, int] = field(
        default_factory=lambda: {tier: 0 for tier in QueueTier}
    )
    failures: int = 0
    started_at: float = 0.0
    finished_at: float = 0.0

    @property
    def total(self) -> int:
        return sum(self.executed.values())

    @property
    def elapsed(self) -> float:
        return max(0.0, self.finished_at - self.started_at)
