# Area: Lightriders
"""
arena_engine.games.lightriders.rules — Lightriders game collaborator
====================================================================

Riders take turns in bot id order. The first two start facing each
other on the middle row; any further riders start on random free cells
(seeded by the ``seed`` option). The last rider left wins; the score is
the number of turns played.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from . import logic
from .logic import LEFT, LIGHTCYCLE, RIGHT, MOVE_TYPES, Rider
from .replay import serialize_replay
from .validators import MoveTypeValidator
from ...config import EngineConfig
from ...errors import ConfigurationError
from ...game import GameRules
from ..._game.player import Player
from ..._game.state import Board, Coordinate, Move, Piece, State
from ..._game.validation import MoveValidator

logger = logging.getLogger("arena_engine.games.lightriders")

MIN_BOARD_SIZE = 4


class LightridersRules(GameRules):
    """Light cycles leaving trails on a square board."""

    name = "lightriders"
    move_type = "move"

    def validate_configuration(self, config: EngineConfig) -> None:
        config.require("board_size")
        if config.board_size < MIN_BOARD_SIZE:
            raise ConfigurationError(
                f"board_size must be at least {MIN_BOARD_SIZE}, got {config.board_size}"
            )

    def game_settings(self, player: Player, players: Sequence[Player],
                      config: EngineConfig) -> List[Tuple[str, object]]:
        return [
            ("field_width", config.board_size),
            ("field_height", config.board_size),
        ]

    def initial_state(self, players: Sequence[Player], config: EngineConfig) -> State:
        size = config.board_size
        rng = random.Random(config.seed)
        board = Board.empty(size)
        riders = []
        for index, player in enumerate(players):
            if index == 0:
                position, direction = Coordinate(size // 4, size // 2), RIGHT
            elif index == 1:
                position, direction = Coordinate(size // 4 * 3, size // 2), LEFT
            else:
                free = [Coordinate(x, y) for y in range(size) for x in range(size)
                        if board.is_empty(Coordinate(x, y))]
                position, direction = rng.choice(free), RIGHT
            board = board.with_piece(position, Piece(LIGHTCYCLE, player.player_id))
            riders.append(Rider(player.player_id, position, direction))

        return build_state(board, riders, players[0].player_id if players else None)

    def pre_game_phase(self, state: State) -> None:
        logger.info(
            "Lightriders on a %dx%d field with %d riders",
            state.board.width, state.board.height, len(logic.riders_of(state)),
        )

    def turn_updates(self, state: State, player: Player) -> List[str]:
        return [
            f"update game round {state.turn}",
            f"update game field {logic.field_for_bots(state)}",
        ]

    def parse_move(self, player: Player, raw: str) -> Move:
        token = raw.strip().lower()
        return Move(
            player_id=player.player_id,
            raw=raw,
            move_type=token if token in MOVE_TYPES else None,
        )

    def validators(self) -> List[MoveValidator]:
        return [MoveTypeValidator()]

    def apply_move(self, state: State, player: Player, move: Optional[Move]) -> State:
        return logic.transform(state, player.player_id, move)

    def is_terminal(self, state: State) -> bool:
        alive = logic.living_ids(state)
        if len(logic.riders_of(state)) > 1:
            return len(alive) <= 1
        return not alive

    def get_winner(self, state: State) -> Optional[int]:
        alive = logic.living_ids(state)
        if len(logic.riders_of(state)) > 1 and len(alive) == 1:
            return alive[0]
        return None

    def get_score(self, state: State) -> float:
        return state.turn

    def serialize_replay(self, history: Sequence[State], config: EngineConfig) -> str:
        return serialize_replay(history, self.get_winner(history[-1]))


def build_state(board: Board, riders: Sequence[Rider], active_player: Optional[int]) -> State:
    """Initial State with ``riders`` in turn order."""
    return State(board=board, active_player=active_player, payload=tuple(riders))
