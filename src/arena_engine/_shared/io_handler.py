# Area: Shared
"""
arena_engine._shared.io_handler — Driving environment transport
===============================================================

Line protocol between the engine and whatever drives it (a match wrapper,
a test harness, a terminal). Defaults to stdin/stdout, so nothing else in
the engine may print to stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from ..errors import ArenaEngineError, ProtocolError

logger = logging.getLogger("arena_engine.io")


class EnvironmentIO:
    """Reads commands from the environment and writes engine replies."""

    def __init__(self, input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self.sent: List[str] = []

    def get_next_message(self) -> str:
        """
        Block for the next line.

        Raises:
            ProtocolError: If the environment closed its end
        """
        line = self.input_stream.readline()
        if line == "":
            raise ProtocolError("Environment closed the input stream")
        line = line.strip()
        logger.debug("[env <<] %s", line)
        return line

    def wait_for_message(self, expected: str) -> None:
        """Skip lines until one equals ``expected``."""
        while True:
            line = self.get_next_message()
            if line == expected:
                return
            logger.warning("Expected '%s', ignoring '%s'", expected, line)

    def send_message(self, line: str) -> None:
        self.output_stream.write(line + "\n")
        self.output_stream.flush()
        self.sent.append(line)
        logger.debug("[env >>] %s", line if len(line) < 200 else line[:200] + "…")

    def send_error(self, error: ArenaEngineError) -> None:
        """Tell the environment the run was aborted."""
        message = " ".join(str(error.message).split())
        self.send_message(f"error {error.error_type} {message}")
