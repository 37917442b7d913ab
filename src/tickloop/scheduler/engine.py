# src/tickloop/scheduler/engine.py

from __future__ import annotations

"""
Cooperative scheduler.

A single-threaded drain loop over three tiers of work:
- microtasks (FIFO), drained to exhaustion before anything else,
- timers, ordered by (due time, insertion sequence), run once due,
- low-priority tasks (FIFO), one at a time, only when nothing above is ready.

Each executed task sends the loop back to the microtask tier, so work a task
schedules is picked up in priority order. Output and chaining belong to the
tasks themselves, not the scheduler.
"""

import contextlib
import heapq
import itertools
import logging
import math
from collections import deque
from collections.abc import Iterator

from ..core.clock import MonotonicClock
from ..core.ports import Clock, TaskCallback
from .errors import SchedulerError, TaskFailure
from .models import DrainStats, QueueTier, Task, TimerEntry, TimerHandle

logger = logging.getLogger(__name__)


def _callback_name(callback: TaskCallback) -> str:
    name = getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None)
    return str(name) if name else repr(callback)


class CooperativeScheduler:
    """
    Explicitly constructed scheduler instance with owned queues.

    No global loop: the embedding program builds one, schedules work on it and
    calls drain(). Independent instances never share state.
    """

    def __init__(self, *, clock: Clock | None = None, halt_on_task_failure: bool = True) -> None:
        self._clock: Clock = clock if clock is not None else MonotonicClock()
        self.halt_on_task_failure = halt_on_task_failure

        self._microtasks: deque[Task] = deque()
        self._timers: list[TimerEntry] = []
        self._low_priority: deque[Task] = deque()

        self._task_ids = itertools.count(1)
        self._timer_seq = itertools.count()
        self._live_timers = 0
        self._draining = False

    @property
    def clock(self) -> Clock:
        return self._clock

    # ---- entry points ----

    def run_synchronous(self, callback: TaskCallback) -> None:
        """Run callback now, on the caller's stack. Exceptions propagate unchanged."""
        if not callable(callback):
            raise TypeError(f"task must be callable, got {type(callback).__name__}")
        callback()

    def schedule_microtask(self, callback: TaskCallback, *, name: str | None = None) -> Task:
        task = self._new_task(callback, QueueTier.MICROTASK, name)
        self._microtasks.append(task)
        logger.debug("Queued %s", task.describe())
        return task

    def schedule_timer(
        self,
        callback: TaskCallback,
        delay: float = 0.0,
        *,
        name: str | None = None,
    ) -> TimerHandle:
        """
        Run callback once `delay` seconds have elapsed on the scheduler clock.

        A zero delay is eligible on the next drain pass, still after every queued microtask.
        """
        if isinstance(delay, bool) or not isinstance(delay, (int, float)):
            raise ValueError(f"timer delay must be a number, got {delay!r}")
        try:
            seconds = float(delay)
        except OverflowError:
            raise ValueError(f"timer delay is out of range, got {delay!r}") from None
        if not math.isfinite(seconds) or seconds < 0:
            raise ValueError(f"timer delay must be finite and non-negative, got {delay!r}")

        task = self._new_task(callback, QueueTier.TIMER, name)
        entry = TimerEntry(
            due_at=self._clock.now() + seconds,
            seq=next(self._timer_seq),
            task=task,
            delay=seconds,
        )
        heapq.heappush(self._timers, entry)
        self._live_timers += 1
        logger.debug("Queued %s delay=%.6fs", task.describe(), entry.delay)
        return TimerHandle(entry, self)

    def schedule_low_priority_task(self, callback: TaskCallback, *, name: str | None = None) -> Task:
        task = self._new_task(callback, QueueTier.LOW_PRIORITY, name)
        self._low_priority.append(task)
        logger.debug("Queued %s", task.describe())
        return task

    def cancel_timer(self, handle: TimerHandle) -> bool:
        """
        Withdraw a pending timer.

        Returns False (and does nothing) if it already ran, was popped for
        execution, or was cancelled before.
        """
        if handle._scheduler is not self:
            raise ValueError("timer handle belongs to a different scheduler")

        entry = handle._entry
        if entry.cancelled or entry.popped:
            return False

        # Lazy removal: the heap entry is skipped when it reaches the top.
        entry.cancelled = True
        self._live_timers -= 1
        logger.debug("Cancelled %s", entry.task.describe())
        return True

    # ---- introspection ----

    def pending(self) -> dict[QueueTier, int]:
        return {
            QueueTier.MICROTASK: len(self._microtasks),
            QueueTier.TIMER: self._live_timers,
            QueueTier.LOW_PRIORITY: len(self._low_priority),
        }

    def is_idle(self) -> bool:
        return not self._microtasks and not self._low_priority and self._live_timers == 0

    # ---- draining ----

    def drain(self) -> DrainStats:
        """
        Run queued work until every queue is empty and no timer is pending.

        Blocks on the clock while only not-yet-due timers remain. With
        halt_on_task_failure, the first failing task stops the drain and is
        re-raised as TaskFailure; untouched work stays queued.
        """
        with self.draining() as stats:
            while True:
                task, wait = self.select_ready()
                if task is not None:
                    self.execute(task, stats)
                    continue
                if wait is None:
                    break
                logger.debug("Idle until next timer (%.6fs)", wait)
                self._clock.sleep(wait)
        return stats

    @contextlib.contextmanager
    def draining(self) -> Iterator[DrainStats]:
        """Guard one drain session (no re-entrant drains) and time it."""
        if self._draining:
            raise SchedulerError("drain() called from inside a running task; schedule work instead")

        self._draining = True
        stats = DrainStats(started_at=self._clock.now())
        logger.debug("Drain started pending=%s", self._pending_text())
        try:
            yield stats
        finally:
            self._draining = False
            stats.finished_at = self._clock.now()

        logger.info(
            "Drain finished executed=%d (microtask=%d timer=%d low_priority=%d) failures=%d",
            stats.total,
            stats.executed[QueueTier.MICROTASK],
            stats.executed[QueueTier.TIMER],
            stats.executed[QueueTier.LOW_PRIORITY],
            stats.failures,
        )

    def select_ready(self) -> tuple[Task | None, float | None]:
        """
        Pick the next unit of work by tier priority.

        Returns (task, None) when something is runnable, (None, wait_seconds)
        when only future timers remain, and (None, None) when idle.
        """
        if self._microtasks:
            return self._microtasks.popleft(), None

        self._discard_cancelled_timers()
        if self._timers:
            head = self._timers[0]
            now = self._clock.now()
            if head.due_at <= now:
                heapq.heappop(self._timers)
                head.popped = True
                self._live_timers -= 1
                return head.task, None

        if self._low_priority:
            return self._low_priority.popleft(), None

        if self._timers:
            return None, max(0.0, self._timers[0].due_at - self._clock.now())

        return None, None

    def execute(self, task: Task, stats: DrainStats) -> None:
        stats.executed[task.tier] += 1
        logger.debug("Running %s", task.describe())
        try:
            task.callback()
        except Exception as exc:
            stats.failures += 1
            if self.halt_on_task_failure:
                logger.error("Task %s failed; halting drain", task.describe())
                raise TaskFailure(task) from exc
            logger.exception("Task %s failed; continuing drain", task.describe())

    # ---- helpers ----

    def _new_task(self, callback: TaskCallback, tier: QueueTier, name: str | None) -> Task:
        if not callable(callback):
            raise TypeError(f"task must be callable, got {type(callback).__name__}")
        return Task(
            id=next(self._task_ids),
            callback=callback,
            tier=tier,
            name=name or _callback_name(callback),
        )

    def _discard_cancelled_timers(self) -> None:
        while self._timers and self._timers[0].cancelled:
            heapq.heappop(self._timers)

    def _pending_text(self) -> str:
        return " ".join(f"{tier.value}={n}" for tier, n in self.pending().items())
