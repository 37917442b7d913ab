# src/tickloop/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduler and its embedding program.

The scheduler depends on Protocols instead of concrete implementations.
This keeps time sources and output sinks swappable and makes testing easier.
"""

from typing import Awaitable, Callable, Protocol, runtime_checkable

TaskCallback = Callable[[], object]
# Zero-argument unit of work. Whatever it returns is ignored by the scheduler.


class Clock(Protocol):
    """Monotonic time source consulted on every drain iteration."""

    def now(self) -> float: ...
    def sleep(self, seconds: float) -> None: ...


@runtime_checkable
class AsyncSleepClock(Protocol):
    """
    Optional extension for clocks that track real time.

    sleep_async() lets an asyncio embedding wait without blocking the loop.
    Clocks without it are logical: waiting means calling sleep() to move time.
    """

    def sleep_async(self, seconds: float) -> Awaitable[None]: ...


class OutputSink(Protocol):
    """
    Where tasks write their observable output (console, log, test recorder).

    Not part of the scheduler: tasks close over a sink, the scheduler never sees it.
    """

    def emit(self, text: str) -> None: ...
