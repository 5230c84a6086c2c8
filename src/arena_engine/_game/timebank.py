# Area: Game
"""
arena_engine._game.timebank — Per-player time budget
====================================================

Each player starts with ``timebank_max`` milliseconds. Every move request
may use the whole remaining bank; afterwards the elapsed time is debited
and ``time_per_move`` is credited back, capped at ``timebank_max``.
A timeout empties the bank.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("arena_engine.timebank")


class Timebank:
    """Tracks one player's remaining thinking time in milliseconds."""

    def __init__(self, timebank_max: int, time_per_move: int) -> None:
        if timebank_max < 0 or time_per_move < 0:
            raise ValueError("Time budgets must be non-negative")
        self.timebank_max = timebank_max
        self.time_per_move = time_per_move
        self._remaining = timebank_max

    @property
    def remaining(self) -> int:
        return self._remaining

    def budget(self) -> int:
        """Budget for the next move request."""
        return self._remaining

    def settle(self, elapsed_ms: int) -> int:
        """Debit a successful request and credit the per-move allowance."""
        debited = max(0, self._remaining - max(0, elapsed_ms))
        self._remaining = min(debited + self.time_per_move, self.timebank_max)
        logger.debug(
            "Timebank settled: used %dms, %dms remaining", elapsed_ms, self._remaining
        )
        return self._remaining

    def exhaust(self) -> None:
        """A timeout consumes everything that was left."""
        self._remaining = 0
