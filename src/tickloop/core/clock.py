# src/tickloop/core/clock.py

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class MonotonicClock:
    """Wall-independent clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    async def sleep_async(self, seconds: float) -> None:
        """Real time passes on its own, so inside an event loop just yield for it."""
        await asyncio.sleep(max(0.0, seconds))


class ManualClock:
    """
    Logical clock for deterministic runs and tests.

    Time only moves when someone calls advance() or sleep(); sleep() never blocks.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"cannot move a clock backwards (seconds={seconds})")
        self._now += float(seconds)
        return self._now

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            logger.debug("ManualClock jump +%.6fs", seconds)
            self._now += float(seconds)


def make_clock(kind: str) -> MonotonicClock | ManualClock:
    """Build a clock from a settings value ("monotonic" | "manual")."""
    kind = (kind or "").strip().lower()
    if kind == "manual":
        return ManualClock()
    if kind != "monotonic":
        logger.warning("Unknown clock kind %r; using monotonic", kind)
    return MonotonicClock()
