# Area: Game
"""
Game layer - game-agnostic model and turn machinery.

This package handles:
- Immutable Board / Piece / Move / State snapshots and the History
- Player handles and their timebanks
- The move validation chain
- The state transition processor
"""

from .state import Board, Coordinate, History, Move, Piece, State
from .timebank import Timebank
from .player import Player
from .validation import (
    ActivePlayerValidator,
    MoveValidationChain,
    MoveValidator,
    ValidationResult,
)
from .processor import StateTransitionProcessor

__all__ = [
    "Board",
    "Coordinate",
    "History",
    "Move",
    "Piece",
    "State",
    "Timebank",
    "Player",
    "ActivePlayerValidator",
    "MoveValidationChain",
    "MoveValidator",
    "ValidationResult",
    "StateTransitionProcessor",
]
