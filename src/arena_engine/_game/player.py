# Area: Game
"""
arena_engine._game.player — Player handle
=========================================

A Player owns exactly one bot channel plus its identity, elimination
status and timebank. Elimination is one-way.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .timebank import Timebank
from ..errors import MoveTimeoutError, ProcessError
from .._shared.bot_channel import BotChannel

logger = logging.getLogger("arena_engine.player")


class Player:
    """One bot taking part in the game."""

    def __init__(self, player_id: int, name: str, channel: Optional[BotChannel],
                 timebank: Timebank):
        self.player_id = player_id
        self.name = name
        self.channel = channel
        self.timebank = timebank
        self.eliminated = False
        self.elimination_reason: Optional[str] = None

    def __repr__(self) -> str:
        status = "eliminated" if self.eliminated else "active"
        return f"Player({self.player_id}, {self.name!r}, {status})"

    def __enter__(self) -> "Player":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def eliminate(self, reason: str) -> None:
        if self.eliminated:
            return
        self.eliminated = True
        self.elimination_reason = reason
        logger.info("%s eliminated: %s", self.name, reason, extra={"player_id": self.player_id})

    # ── Protocol ──────────────────────────────────────────────

    def send_message(self, line: str) -> None:
        """Send a line to the bot; a broken channel eliminates the player."""
        if self.eliminated or self.channel is None:
            return
        try:
            self.channel.send_message(line)
        except ProcessError as e:
            self.eliminate(f"process error: {e.message}")

    def send_setting(self, key: str, value: Any) -> None:
        self.send_message(f"settings {key} {value}")

    def request_move(self, move_type: str) -> str:
        """
        Request a move within the remaining timebank.

        Raises:
            MoveTimeoutError: The bot was too slow; the player is now eliminated
            ProcessError: The bot is gone; the player is now eliminated
        """
        if self.eliminated:
            raise ProcessError(f"{self.name} is already eliminated", player_id=self.player_id)
        if self.channel is None:
            self.eliminate("no bot process")
            raise ProcessError(f"{self.name} has no bot process", player_id=self.player_id)

        try:
            response = self.channel.request_move(move_type, self.timebank.budget())
        except MoveTimeoutError:
            self.timebank.exhaust()
            self.eliminate("timeout")
            raise
        except ProcessError as e:
            self.eliminate(f"process error: {e.message}")
            raise

        self.timebank.settle(self.channel.last_elapsed_ms)
        return response

    # ── Diagnostics ───────────────────────────────────────────

    @property
    def stderr(self) -> str:
        return self.channel.stderr if self.channel is not None else ""

    @property
    def dump(self) -> List[str]:
        return list(self.channel.dump) if self.channel is not None else []

    def close(self) -> None:
        if self.channel is not None:
            self.channel.close()
