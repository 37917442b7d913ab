# src/tickloop/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns settings into a concrete
CooperativeScheduler. Nothing below this layer reads configuration.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import make_clock
from ..scheduler.engine import CooperativeScheduler

logger = logging.getLogger(__name__)


def create_scheduler(*, settings=None) -> CooperativeScheduler:
    """
    Build a scheduler from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    clock = make_clock(getattr(settings, "clock", "monotonic"))
    halt = bool(getattr(settings, "halt_on_task_failure", True))

    logger.debug("Scheduler clock=%s halt_on_task_failure=%s", type(clock).__name__, halt)
    return CooperativeScheduler(clock=clock, halt_on_task_failure=halt)
