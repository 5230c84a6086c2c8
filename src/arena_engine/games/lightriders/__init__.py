# Area: Lightriders
"""
Lightriders - reference game for the arena engine.

Riders steer light cycles around a square field; every cell a rider
leaves becomes a wall. Hitting a wall or the edge of the field takes the
rider out of the game.
"""

from .logic import Rider, DIRECTIONS, MOVE_TYPES
from .rules import LightridersRules, build_state
from .replay import serialize_replay, load_replay, replay_boards
from .validators import MoveTypeValidator

__all__ = [
    "Rider",
    "DIRECTIONS",
    "MOVE_TYPES",
    "LightridersRules",
    "build_state",
    "serialize_replay",
    "load_replay",
    "replay_boards",
    "MoveTypeValidator",
]
