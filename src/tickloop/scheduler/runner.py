# src/tickloop/scheduler/runner.py

from __future__ import annotations

"""
asyncio embedding for the cooperative scheduler.

Same selection and failure rules as CooperativeScheduler.drain(), but waiting
for future timers on a real-time clock awaits instead of blocking the thread,
and control returns to the event loop between tasks.

To stop draining early, cancel the coroutine/task.
"""

import asyncio
import logging

from ..core.ports import AsyncSleepClock
from .engine import CooperativeScheduler
from .models import DrainStats

logger = logging.getLogger(__name__)


async def run_until_idle(
        scheduler: CooperativeScheduler,
        *,
        poll_seconds: float | None = None,
) -> DrainStats:
    """
    Drain `scheduler` from inside a running event loop.

    poll_seconds caps a single idle wait so the loop re-checks the queues
    (other coroutines may schedule work meanwhile). None means wait exactly
    until the next timer is due.

    Clocks with sleep_async() are awaited; any other clock is logical and is
    moved forward with sleep(), exactly as drain() does.
    """
    with scheduler.draining() as stats:
        while True:
            task, wait = scheduler.select_ready()
            if task is not None:
                scheduler.execute(task, stats)
                await asyncio.sleep(0)
                continue

            if wait is None:
                break

            if poll_seconds is not None:
                wait = min(wait, max(0.0, float(poll_seconds)))

            clock = scheduler.clock
            if isinstance(clock, AsyncSleepClock):
                logger.debug("Awaiting next timer (%.6fs)", wait)
                await clock.sleep_async(wait)
            else:
                clock.sleep(wait)
                await asyncio.sleep(0)

    return stats
