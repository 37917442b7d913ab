# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tickloop.core.clock import ManualClock
from tickloop.scheduler.engine import CooperativeScheduler

from .fakes import RecordingSink


@pytest.fixture()
def settings(tmp_path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="tickloop-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        halt_on_task_failure=True,
        clock="manual",
    )


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def scheduler(clock: ManualClock) -> CooperativeScheduler:
    """Scheduler on logical time: timers never make tests sleep."""
    return CooperativeScheduler(clock=clock)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
