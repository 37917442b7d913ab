# src/tickloop/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


class ConsoleSink:
    """OutputSink that prints each emitted value on its own line (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.lines: list[str] = []

    def emit(self, text: str) -> None:
        self.lines.append(text)
        stream = self._stream if self._stream is not None else sys.stdout
        print(text, file=stream, flush=True)
