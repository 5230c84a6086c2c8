"""
arena_engine — Turn-based bot game engine
=========================================

Runs turn-based games between bots that are separate processes talking
a line-based text protocol. The engine owns the control flow: it starts
the bots, asks them for moves under a timebank, validates and applies
the moves, and records a replayable history. Game rules are plugged in
as a GameRules object.

Quick Start:
    from arena_engine import GameEngine
    from arena_engine.games import get_game

    engine = GameEngine(rules=get_game("lightriders"),
                        bot_commands=["python my_bot.py"])
    result = engine.run()

Custom game:
    from arena_engine import GameRules
    class MyGame(GameRules): ...  # Implement the abstract methods
    GameEngine(rules=MyGame(), bot_commands=[...]).run()
"""

from .game import GameRules
from .config import EngineConfig, RejectionPolicy
from ._engine import GameEngine, GameResult, PlayerReport, TurnScheduler, TurnPhase
from ._game import (
    Board,
    Coordinate,
    History,
    Move,
    MoveValidationChain,
    MoveValidator,
    Piece,
    Player,
    State,
    StateTransitionProcessor,
    Timebank,
)
from ._shared import BotChannel, EnvironmentIO, ScriptedChannel, setup_logging
from .errors import (
    ArenaEngineError,
    ConfigurationError,
    ProcessError,
    MoveTimeoutError,
    ValidationRejection,
    TransformError,
    ProtocolError,
)

__all__ = [
    # Main classes
    "GameEngine",
    "GameRules",
    "EngineConfig",
    "RejectionPolicy",
    "GameResult",
    "PlayerReport",
    "TurnScheduler",
    "TurnPhase",
    # Game model
    "Board",
    "Coordinate",
    "History",
    "Move",
    "Piece",
    "State",
    "Player",
    "Timebank",
    "MoveValidator",
    "MoveValidationChain",
    "StateTransitionProcessor",
    # Transport
    "BotChannel",
    "EnvironmentIO",
    "ScriptedChannel",
    "setup_logging",
    # Errors
    "ArenaEngineError",
    "ConfigurationError",
    "ProcessError",
    "MoveTimeoutError",
    "ValidationRejection",
    "TransformError",
    "ProtocolError",
]
__version__ = "1.0.0"
