# src/tickloop/cli/demo.py

from __future__ import annotations

from ..core.ports import OutputSink
from ..scheduler.chain import schedule_chain
from ..scheduler.engine import CooperativeScheduler

EXPECTED_ORDER = ["1", "7", "3", "4", "5", "2", "6"]


def build_event_order_demo(scheduler: CooperativeScheduler, sink: OutputSink) -> None:
    """
    Classic event-loop ordering puzzle.

    Schedules, in source order: sync 1, timer(0) 2, microtask 3, a two-step
    chain 4 -> 5, low-priority 6, sync 7. Synchronous output appears
    immediately; drain() then produces 3, 4, 5, 2, 6.
    """
    scheduler.run_synchronous(lambda: sink.emit("1"))

    scheduler.schedule_timer(lambda: sink.emit("2"), 0, name="timer-2")

    scheduler.schedule_microtask(lambda: sink.emit("3"), name="microtask-3")

    schedule_chain(
        scheduler,
        lambda: sink.emit("4"),
        lambda: sink.emit("5"),
        name="chain-4-5",
    )

    scheduler.schedule_low_priority_task(lambda: sink.emit("6"), name="low-6")

    scheduler.run_synchronous(lambda: sink.emit("7"))
