# src/tickloop/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the scheduler from settings, then runs the
event-order demo: values print to stdout as tasks emit them, followed by a
one-line summary of the observed order. Logs go to stderr (and the log file).
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_scheduler
from ..cli.demo import EXPECTED_ORDER, build_event_order_demo
from ..config import get_settings
from ..connectors.console_connector import ConsoleSink
from ..logging_setup import setup_logging
from ..scheduler.errors import TaskFailure

logger = logging.getLogger(__name__)


def _console_level(level_name: str) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    level = logging.getLevelName(str(level_name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    console_level = _console_level(getattr(settings, "log_level", "INFO"))

    log_dir = settings.log_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    scheduler = create_scheduler(settings=settings)
    sink = ConsoleSink()

    try:
        build_event_order_demo(scheduler, sink)
        stats = scheduler.drain()
    except TaskFailure as e:
        logger.error("%s (tier=%s): %s", e, e.tier.value, e.__cause__)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130

    print(f"order: {', '.join(sink.lines)}")
    if sink.lines != EXPECTED_ORDER:
        logger.warning("Unexpected order %s (expected %s)", sink.lines, EXPECTED_ORDER)

    logger.info("Bye. (%d queued tasks in %.3fs)", stats.total, stats.elapsed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
