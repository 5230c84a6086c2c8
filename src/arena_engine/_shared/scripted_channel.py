# Area: Shared
"""
arena_engine._shared.scripted_channel — File-backed bot channel
===============================================================

Offline replacement for BotChannel: the bot's answers are read from a
text file, one answer per line, instead of from a running process. Used
to replay or debug a game without starting any bot.

The constructor takes the same arguments as BotChannel, with the command
being the path of the answer file, so the class can be handed to
GameEngine as its channel factory.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, List, Optional

from ..errors import ProcessError

logger = logging.getLogger("arena_engine.scripted_channel")


class ScriptedChannel:
    """Answers move requests from a file. Never times out."""

    def __init__(self, path: str, label: str, player_id: Optional[int] = None):
        self.command = path
        self.label = label
        self.player_id = player_id
        self.dump: List[str] = []
        self.stderr = ""
        self.last_elapsed_ms = 0
        self._closed = False

        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ProcessError(
                f"{label} answer file cannot be read: {e}",
                player_id=player_id,
                context={"path": path},
            ) from e
        self._answers: Deque[str] = deque(
            line.strip() for line in text.splitlines() if line.strip()
        )
        logger.info("Loaded %d answer(s) for %s from %s", len(self._answers), label, path)

    def __enter__(self) -> "ScriptedChannel":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def is_alive(self) -> bool:
        return not self._closed

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def send_message(self, line: str) -> None:
        if self._closed:
            raise ProcessError(f"{self.label} is not running", player_id=self.player_id)
        self.dump.append(line)
        logger.debug("[%s >>] %s", self.label, line)

    def wait_for_message(self, expected: str, timeout_ms: Optional[int] = None) -> None:
        """Consume answers up to and including one equal to ``expected``."""
        while self._answers:
            if self._answers.popleft() == expected:
                return
        raise ProcessError(
            f"{self.label} answer file ended before '{expected}'",
            player_id=self.player_id,
        )

    def request_move(self, move_type: str, budget_ms: int) -> str:
        """
        Send the action request and return the next scripted answer.

        Raises:
            ProcessError: If the answer file has no answers left
        """
        self.send_message(f"action {move_type} {max(0, int(budget_ms))}")
        self.last_elapsed_ms = 0
        if not self._answers:
            raise ProcessError(
                f"{self.label} answer file is exhausted", player_id=self.player_id,
                context={"path": self.command},
            )
        line = self._answers.popleft()
        logger.debug("[%s <<] %s", self.label, line)
        return line

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._answers:
            logger.info("Closed %s with %d unused answer(s)", self.label, len(self._answers))
