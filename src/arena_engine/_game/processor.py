# Area: Game
"""
arena_engine._game.processor — State transition processor
=========================================================

Turns (State, Player, raw Move) into the next State:
validation first, then the configured fallback for rejected moves,
then the game's transform. Calls into the game during play go through
here; a game hook that raises is a broken game implementation and
aborts the run with a TransformError.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from .player import Player
from .state import Move, State
from .validation import ActivePlayerValidator, MoveValidationChain, ValidationResult
from ..config import EngineConfig, RejectionPolicy
from ..errors import ArenaEngineError, TransformError

if TYPE_CHECKING:
    from ..game import GameRules

logger = logging.getLogger("arena_engine.processor")


class StateTransitionProcessor:
    """Validates and applies moves using the injected game rules."""

    def __init__(self, rules: "GameRules", config: EngineConfig,
                 chain: Optional[MoveValidationChain] = None):
        self.rules = rules
        self.config = config
        self.policy = RejectionPolicy(config.invalid_move_policy)
        if chain is None:
            chain = MoveValidationChain([ActivePlayerValidator(), *rules.validators()])
        self.chain = chain
        self._pre_game_done = False

    def initial_state(self, players: Sequence[Player]) -> State:
        state = self._delegate("initial_state", players, self.config)
        if not state.is_initial:
            raise TransformError("Initial state must not have a predecessor")
        eliminated = frozenset(p.player_id for p in players if p.eliminated)
        if eliminated - state.eliminated:
            # Bots that never started are out before the first turn
            state = replace(state, eliminated=state.eliminated | eliminated)
        if state.active_player in state.eliminated:
            state = replace(state, active_player=self.next_player(state, players))
        return state

    def pre_game_phase(self, state: State) -> None:
        if self._pre_game_done:
            logger.warning("Pre-game phase already ran; ignoring second call")
            return
        self._pre_game_done = True
        self._delegate("pre_game_phase", state)

    def validate(self, state: State, move: Move) -> ValidationResult:
        try:
            return self.chain.validate(move, state)
        except Exception as e:
            raise TransformError(
                f"{self.rules.name} validation failed: {e}",
                player_id=move.player_id,
                context={"turn": state.turn, "move": move.raw},
            ) from e

    def process(self, state: State, player: Player, move: Optional[Move]) -> State:
        """
        Produce the State following ``state`` for ``player``'s ``move``.

        ``move`` is None when the bot gave no usable answer.
        """
        if move is None:
            if player.eliminated and player.player_id not in state.eliminated:
                return state.with_eliminated(player.player_id)
            if player.player_id in state.eliminated:
                return state.derive()
            return self._transform(state, player, None)

        result = self.validate(state, move)
        if result.is_valid:
            return self._transform(state, player, move)

        if self.policy == RejectionPolicy.ELIMINATE:
            player.eliminate(f"invalid move {move.raw!r} ({result.rejected_by})")
            return state.with_eliminated(
                player.player_id, move=move, rejection=result.rejected_by
            )
        next_state = self._transform(state, player, None)
        return replace(next_state, move=move, rejection=result.rejected_by)

    def _transform(self, state: State, player: Player, move: Optional[Move]) -> State:
        try:
            next_state = self.rules.apply_move(state, player, move)
        except Exception as e:
            raise TransformError(
                f"{self.rules.name} transform failed: {e}",
                player_id=player.player_id,
                context={"turn": state.turn, "move": move.raw if move else None},
            ) from e
        if next_state.previous is not state:
            raise TransformError(
                f"{self.rules.name} transform did not derive from the current state",
                player_id=player.player_id,
                context={"turn": state.turn},
            )
        if not state.eliminated <= next_state.eliminated:
            raise TransformError(
                f"{self.rules.name} transform revived an eliminated player",
                player_id=player.player_id,
            )
        return next_state

    # ── Delegation to the game ────────────────────────────────

    def parse_move(self, player: Player, raw: str) -> Move:
        return self._delegate("parse_move", player, raw)

    def turn_updates(self, state: State, player: Player) -> List[str]:
        return self._delegate("turn_updates", state, player)

    def next_player(self, state: State, players: Sequence[Player]) -> Optional[int]:
        return self._delegate("next_player", state, players)

    def is_terminal(self, state: State) -> bool:
        return self._delegate("is_terminal", state)

    def get_winner(self, state: State) -> Optional[int]:
        return self._delegate("get_winner", state)

    def get_score(self, state: State) -> float:
        return self._delegate("get_score", state)

    def serialize_replay(self, history: Sequence[State]) -> str:
        return self._delegate("serialize_replay", history, self.config)

    def _delegate(self, hook: str, *args: Any) -> Any:
        """Call a game hook; a hook that raises is a broken game implementation."""
        try:
            return getattr(self.rules, hook)(*args)
        except ArenaEngineError:
            raise
        except Exception as e:
            raise TransformError(
                f"{self.rules.name}.{hook} failed: {e}", context={"hook": hook}
            ) from e
