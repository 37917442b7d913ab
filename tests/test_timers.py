# tests/test_timers.py

from __future__ import annotations

import math

import pytest

from tickloop.core.clock import ManualClock, MonotonicClock
from tickloop.scheduler.engine import CooperativeScheduler
from tickloop.scheduler.models import QueueTier


def test_equal_delay_timers_run_in_scheduling_order(scheduler, sink) -> None:
    for i in range(5):
        scheduler.schedule_timer(sink.emitter(str(i)), 1.0)

    scheduler.drain()

    assert sink.lines == ["0", "1", "2", "3", "4"]


def test_timers_run_by_due_time_then_insertion(scheduler, sink) -> None:
    scheduler.schedule_timer(sink.emitter("slow"), 2.0)
    scheduler.schedule_timer(sink.emitter("fast-a"), 1.0)
    scheduler.schedule_timer(sink.emitter("zero"), 0)
    scheduler.schedule_timer(sink.emitter("fast-b"), 1.0)

    scheduler.drain()

    assert sink.lines == ["zero", "fast-a", "fast-b", "slow"]


def test_timer_due_time_is_relative_to_scheduling_time(scheduler, clock, sink) -> None:
    scheduler.schedule_timer(sink.emitter("a"), 3.0)  # due at 3
    clock.advance(2.0)
    scheduler.schedule_timer(sink.emitter("b"), 0.5)  # due at 2.5

    scheduler.drain()

    assert sink.lines == ["b", "a"]
    assert clock.now() == pytest.approx(3.0)


def test_cancel_pending_timer_prevents_execution(scheduler, sink) -> None:
    keep = scheduler.schedule_timer(sink.emitter("keep"), 0)
    drop = scheduler.schedule_timer(sink.emitter("drop"), 0)

    assert drop.cancel() is True
    assert drop.cancelled()
    assert scheduler.pending()[QueueTier.TIMER] == 1

    scheduler.drain()

    assert sink.lines == ["keep"]
    assert keep.done()
    assert not drop.done()


def test_cancel_is_idempotent(scheduler, sink) -> None:
    handle = scheduler.schedule_timer(sink.emitter("x"), 1.0)

    assert scheduler.cancel_timer(handle) is True
    assert scheduler.cancel_timer(handle) is False
    assert handle.cancel() is False

    scheduler.drain()
    assert sink.lines == []
    assert scheduler.is_idle()


def test_cancel_after_execution_is_a_noop(scheduler, sink) -> None:
    handle = scheduler.schedule_timer(sink.emitter("ran"), 0)
    scheduler.drain()

    assert handle.done()
    assert handle.cancel() is False
    assert not handle.cancelled()
    assert sink.lines == ["ran"]


def test_timer_can_cancel_a_later_timer(scheduler, sink) -> None:
    later = scheduler.schedule_timer(sink.emitter("later"), 5.0)

    def first() -> None:
        sink.emit("first")
        later.cancel()

    scheduler.schedule_timer(first, 1.0)
    scheduler.drain()

    assert sink.lines == ["first"]
    assert later.cancelled()


def test_cancelling_running_timer_from_inside_is_a_noop(scheduler, sink) -> None:
    holder: dict = {}

    def self_cancel() -> None:
        holder["result"] = holder["handle"].cancel()
        sink.emit("ran")

    holder["handle"] = scheduler.schedule_timer(self_cancel, 0)
    scheduler.drain()

    assert holder["result"] is False
    assert sink.lines == ["ran"]


def test_drain_skips_cancelled_head_and_does_not_wait_for_it(scheduler, clock, sink) -> None:
    far = scheduler.schedule_timer(sink.emitter("far"), 100.0)
    scheduler.schedule_timer(sink.emitter("near"), 1.0)
    far.cancel()

    scheduler.drain()

    assert sink.lines == ["near"]
    assert clock.now() == pytest.approx(1.0)


def test_handle_from_other_scheduler_is_rejected(scheduler, sink) -> None:
    other = CooperativeScheduler(clock=ManualClock())
    handle = other.schedule_timer(sink.emitter("x"), 0)

    with pytest.raises(ValueError):
        scheduler.cancel_timer(handle)


@pytest.mark.parametrize("delay", [-1, -0.001, math.nan, math.inf, -math.inf, 10**400, "1", None, True])
def test_invalid_delays_are_rejected(scheduler, sink, delay) -> None:
    with pytest.raises(ValueError):
        scheduler.schedule_timer(sink.emitter("x"), delay)  # type: ignore[arg-type]

    assert scheduler.is_idle()


def test_infinite_delay_never_reaches_real_clock(sink) -> None:
    scheduler = CooperativeScheduler(clock=MonotonicClock())

    with pytest.raises(ValueError):
        scheduler.schedule_timer(sink.emitter("never"), math.inf)
    scheduler.schedule_low_priority_task(sink.emitter("low"))

    scheduler.drain()

    assert sink.lines == ["low"]


def test_handle_exposes_timer_details(scheduler, clock, sink) -> None:
    clock.advance(10.0)
    handle = scheduler.schedule_timer(sink.emitter("x"), 2.5)

    assert handle.delay == 2.5
    assert handle.due_at == pytest.approx(12.5)
    assert handle.task_id >= 1
    assert not handle.done()
