# Area: Game Rules
"""
arena_engine.game — The capability set a game plugs into the engine
===================================================================

A game subclasses GameRules and hands an instance to GameEngine.
The engine never inherits from a game and never decides game rules
itself: it asks the rules object for the initial State, how to read a
bot's answer, which validators apply, how a move transforms a State,
who moves next, and when and how the game ends.

Minimal implementation:

    class MyGame(GameRules):
        name = "mygame"
        def initial_state(self, players, config): ...
        def parse_move(self, player, raw): ...
        def apply_move(self, state, player, move): ...
        def is_terminal(self, state): ...
        def get_winner(self, state): ...
        def get_score(self, state): ...
        def serialize_replay(self, history, config): ...

    engine = GameEngine(rules=MyGame(), bot_commands=["python bot.py"])
    engine.run()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .config import EngineConfig
from ._game.player import Player
from ._game.state import Move, State
from ._game.timebank import Timebank
from ._game.validation import MoveValidator
from ._shared.bot_channel import BotChannel


class GameRules(ABC):
    """
    Abstract base class for a game collaborator.

    Every State passed in is immutable; every method that changes the
    game returns a new State built with ``state.derive(...)``.
    """

    name = "game"
    move_type = "move"

    # ──────────────────────────────────────────────────────────────
    # Setup
    # ──────────────────────────────────────────────────────────────
    def validate_configuration(self, config: EngineConfig) -> None:
        """
        Called once before any bot process is started.

        Raise ConfigurationError (``config.require(...)`` does) when
        something the game needs is missing.
        """

    def create_player(self, player_id: int, channel: Optional[BotChannel],
                      config: EngineConfig) -> Player:
        """Build the Player for ``player_id``. ``channel`` is None if the bot failed to start."""
        return Player(
            player_id=player_id,
            name=f"player{player_id}",
            channel=channel,
            timebank=Timebank(config.timebank_max, config.time_per_move),
        )

    def game_settings(self, player: Player, players: Sequence[Player],
                      config: EngineConfig) -> List[Tuple[str, object]]:
        """Extra ``settings <key> <value>`` pairs sent to each bot after the engine's own."""
        return []

    @abstractmethod
    def initial_state(self, players: Sequence[Player], config: EngineConfig) -> State:
        """Return the start-of-game State (no move, no predecessor)."""

    def pre_game_phase(self, state: State) -> None:
        """Hook run once before the first turn."""

    # ──────────────────────────────────────────────────────────────
    # Turns
    # ──────────────────────────────────────────────────────────────
    def turn_updates(self, state: State, player: Player) -> List[str]:
        """Lines sent to the active bot right before its move request."""
        return []

    @abstractmethod
    def parse_move(self, player: Player, raw: str) -> Move:
        """
        Turn a bot's raw answer into a Move. Must not raise: an answer
        that cannot be read gets ``move_type=None`` and is left to the
        validators to reject.
        """

    def validators(self) -> List[MoveValidator]:
        """Game validators, run after the engine's own, in this order."""
        return []

    @abstractmethod
    def apply_move(self, state: State, player: Player, move: Optional[Move]) -> State:
        """
        Pure transform producing the next State.

        ``move`` is None when the player's move was dropped (rejected
        under the ignore policy, or no answer); the game then keeps the
        player's previous intent. Must not raise on a validated move.
        """

    def next_player(self, state: State, players: Sequence[Player]) -> Optional[int]:
        """Round robin after ``state.active_player``, skipping eliminated players."""
        order = [p.player_id for p in players]
        alive = [pid for pid in order if pid not in state.eliminated]
        if not alive:
            return None
        if state.active_player not in order:
            return alive[0]
        start = order.index(state.active_player)
        for offset in range(1, len(order) + 1):
            candidate = order[(start + offset) % len(order)]
            if candidate in alive:
                return candidate
        return None

    # ──────────────────────────────────────────────────────────────
    # Outcome
    # ──────────────────────────────────────────────────────────────
    @abstractmethod
    def is_terminal(self, state: State) -> bool:
        ...

    @abstractmethod
    def get_winner(self, state: State) -> Optional[int]:
        """Winning player id, or None (draw or game still running)."""

    @abstractmethod
    def get_score(self, state: State) -> float:
        ...

    @abstractmethod
    def serialize_replay(self, history: Sequence[State], config: EngineConfig) -> str:
        """Render the whole game, initial State first, for the visualizer."""
