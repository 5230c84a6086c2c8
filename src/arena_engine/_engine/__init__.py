# Area: Engine
"""
Engine - orchestration layer between the environment, the bots and the game.

This package handles:
- Engine lifecycle (setup, pre-game, game loop, finish)
- Turn scheduling and its phase state machine
- Game result reporting
"""

from .enums import TurnPhase, TurnEvent
from .state_machine import TurnStateMachine
from .game_result import GameResult, PlayerReport
from .game_loop import TurnScheduler
from .orchestrator import GameEngine

__all__ = [
    "TurnPhase",
    "TurnEvent",
    "TurnStateMachine",
    "GameResult",
    "PlayerReport",
    "TurnScheduler",
    "GameEngine",
]
