# Area: Lightriders
"""
Lightriders move validators.

Only the answer's form is checked. Turning straight back is a legal
move: the rider drives into its own trail and crashes.
"""

from __future__ import annotations

from .logic import MOVE_TYPES
from ..._game.state import Move, State
from ..._game.validation import MoveValidator


class MoveTypeValidator(MoveValidator):
    """The answer must be one of up, down, left, right or pass."""

    def is_applicable(self, move: Move, state: State) -> bool:
        return True

    def is_valid(self, move: Move, state: State) -> bool:
        return move.move_type in MOVE_TYPES
