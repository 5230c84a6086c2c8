# Area: Engine
"""
arena_engine._engine.game_result — Game Result Dataclasses
==========================================================

Defines the GameResult and PlayerReport dataclasses the engine returns
after a game finishes. Storing them (object storage, database) is left
to the caller.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..types import ResultDetails


@dataclass
class PlayerReport:
    """
    One player's outcome and diagnostics.

    Attributes:
        player_id: Bot identifier from ``bot_ids``
        name: Display name, e.g. ``player1``
        eliminated: Whether the player was out when the game ended
        elimination_reason: Why it was eliminated, if it was
        timebank_remaining: Milliseconds left in its timebank
        stderr: Everything the bot wrote to stderr
        dump: Every line the engine sent to the bot
    """

    player_id: int
    name: str
    eliminated: bool
    elimination_reason: Optional[str]
    timebank_remaining: int
    stderr: str = ""
    dump: List[str] = field(default_factory=list)


@dataclass
class GameResult:
    """
    Complete result of one game.

    Attributes:
        winner_id: Winning player id, or None for a draw
        score: Game-defined score
        replay: Serialized history for the visualizer
        turns: Number of turns played
        players: Per-player reports, in bot id order
    """

    winner_id: Optional[int]
    score: float
    replay: str
    turns: int
    players: List[PlayerReport] = field(default_factory=list)

    def details(self) -> ResultDetails:
        """Payload answered to the environment's ``details`` request."""
        return {
            "winner": "null" if self.winner_id is None else str(self.winner_id),
            "score": self.score,
        }
