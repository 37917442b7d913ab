# src/tickloop/scheduler/chain.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.ports import TaskCallback
from .engine import CooperativeScheduler
from .models import Task

logger = logging.getLogger(__name__)


def schedule_chain(
    scheduler: CooperativeScheduler,
    *steps: TaskCallback,
    name: str | None = None,
) -> Task | None:
    """
    Schedule dependent steps as a chain of microtasks (promise-style .then()).

    Only the first step is queued now. Each step, after it returns, queues its
    successor, so a chain contributes one ready microtask at a time and other
    microtasks interleave between its steps. A failing step ends the chain.

    Returns the first queued Task, or None for an empty chain.
    """
    if not steps:
        return None
    for step in steps:
        if not callable(step):
            raise TypeError(f"chain step must be callable, got {type(step).__name__}")

    label = name or "chain"
    return scheduler.schedule_microtask(
        _link(scheduler, steps, 0, label),
        name=f"{label}[0]",
    )


def _link(
    scheduler: CooperativeScheduler,
    steps: Sequence[TaskCallback],
    index: int,
    label: str,
) -> TaskCallback:
    def run_step() -> None:
        steps[index]()
        nxt = index + 1
        if nxt < len(steps):
            scheduler.schedule_microtask(
                _link(scheduler, steps, nxt, label),
                name=f"{label}[{nxt}]",
            )
        else:
            logger.debug("Chain %s complete (%d steps)", label, len(steps))

    return run_step
