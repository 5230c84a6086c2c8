# Area: Engine
"""
arena_engine._engine.game_loop — Turn scheduler
===============================================

Drives the game one turn at a time: ask the active player for a move,
push it through the processor, record the new State, pick the next
player, and stop at a terminal State.

Strictly sequential: exactly one move request is outstanding at any
time. A player that times out or whose process dies is eliminated and
its turn is applied with no move; the game carries on without it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Optional, Sequence

from .enums import TurnEvent, TurnPhase
from .state_machine import TurnStateMachine
from .._game.player import Player
from .._game.processor import StateTransitionProcessor
from .._game.state import History, Move, State
from ..errors import MoveTimeoutError, ProcessError, TransformError

logger = logging.getLogger("arena_engine.engine.game_loop")


class TurnScheduler:
    """
    Runs turns until the game is over.

    Attributes:
        state_machine: Phase tracker for the current turn
        history: Every State produced so far, initial State first
        max_turns: Optional hard stop on the number of turns
    """

    def __init__(self, max_turns: Optional[int] = None):
        self.max_turns = max_turns
        self.state_machine = TurnStateMachine()
        self.history: Optional[History] = None

    def run(self, initial_state: State, processor: StateTransitionProcessor,
            players: Sequence[Player]) -> State:
        """Play the game from ``initial_state`` and return the final State."""
        self.state_machine.reset()
        self.history = History(initial_state)
        by_id: Dict[int, Player] = {p.player_id: p for p in players}
        state = initial_state

        if self._is_over(state, processor):
            self.state_machine.transition(TurnEvent.GAME_OVER)

        while not self.state_machine.is_terminal:
            player = by_id[state.active_player]
            move = self._await_move(state, player, processor)
            state = self._apply(state, player, move, processor, players, by_id)
            event = TurnEvent.GAME_OVER if self._is_over(state, processor) else TurnEvent.NEXT_PLAYER
            self.state_machine.transition(event)

        winner = processor.get_winner(state)
        logger.info(
            "Game over after %d turns, winner: %s",
            state.turn, "none" if winner is None else winner,
        )
        return state

    # ── Phases ────────────────────────────────────────────────

    def _await_move(self, state: State, player: Player,
                    processor: StateTransitionProcessor) -> Optional[Move]:
        """AWAITING_MOVE: one request to the active player."""
        for line in processor.turn_updates(state, player):
            player.send_message(line)
        try:
            raw = player.request_move(processor.rules.move_type)
        except (MoveTimeoutError, ProcessError) as e:
            logger.warning(
                "Turn %d: no move from %s (%s)", state.turn, player.name, e.message,
                extra={"player_id": player.player_id, "turn": state.turn},
            )
            self.state_machine.transition(TurnEvent.MOVE_MISSING)
            return None
        self.state_machine.transition(TurnEvent.MOVE_RECEIVED)
        return processor.parse_move(player, raw)

    def _apply(self, state: State, player: Player, move: Optional[Move],
               processor: StateTransitionProcessor, players: Sequence[Player],
               by_id: Dict[int, Player]) -> State:
        """APPLYING: produce, stamp and record the next State."""
        next_state = processor.process(state, player, move)

        for player_id in next_state.eliminated - state.eliminated:
            by_id[player_id].eliminate("eliminated by game rules")

        next_id = processor.next_player(next_state, players)
        if next_id is not None and (next_id not in by_id or next_id in next_state.eliminated):
            raise TransformError(
                f"{processor.rules.name} picked player {next_id} to move, who cannot move",
                context={"turn": next_state.turn},
            )
        next_state = replace(next_state, active_player=next_id)
        self.history.append(next_state)
        self.state_machine.transition(TurnEvent.STATE_APPLIED)
        return next_state

    def _is_over(self, state: State, processor: StateTransitionProcessor) -> bool:
        """CHECKING_TERMINAL: the game decides, plus the engine's own limits."""
        if state.active_player is None:
            logger.info("No players left to move")
            return True
        if processor.is_terminal(state):
            return True
        if self.max_turns is not None and state.turn >= self.max_turns:
            logger.info("Turn limit %d reached", self.max_turns)
            return True
        return False

    @property
    def phase(self) -> TurnPhase:
        return self.state_machine.current_phase
