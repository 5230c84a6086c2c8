# Area: Lightriders
"""
arena_engine.games.lightriders.logic — Rider movement
=====================================================

A rider keeps moving in its current direction. A move only changes the
direction; the rider then advances one cell. Leaving the board or
driving into any occupied cell eliminates it. The cell it leaves becomes
part of its trail.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from ..._game.state import Coordinate, Move, Piece, State

UP, DOWN, LEFT, RIGHT, PASS = "up", "down", "left", "right", "pass"

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}
MOVE_TYPES = frozenset(DIRECTIONS) | {PASS}

LIGHTCYCLE = "lightcycle"
TRAIL = "trail"


@dataclass(frozen=True)
class Rider:
    player_id: int
    position: Coordinate
    direction: str


def riders_of(state: State) -> Tuple[Rider, ...]:
    return state.payload or ()


def rider_of(state: State, player_id: int) -> Optional[Rider]:
    for rider in riders_of(state):
        if rider.player_id == player_id:
            return rider
    return None


def living_ids(state: State) -> List[int]:
    return [r.player_id for r in riders_of(state) if r.player_id not in state.eliminated]


def transform(state: State, player_id: int, move: Optional[Move]) -> State:
    """
    Apply ``move`` for ``player_id`` and return the next State.

    ``move`` None (or ``pass``) keeps the current direction.
    """
    rider = rider_of(state, player_id)
    if rider is None:
        raise KeyError(f"No rider for player {player_id}")
    if player_id in state.eliminated:
        return state.derive(move=move)

    direction = rider.direction
    if move is not None and move.move_type in DIRECTIONS:
        direction = move.move_type

    dx, dy = DIRECTIONS[direction]
    target = rider.position.shifted(dx, dy)
    board = state.board.with_piece(rider.position, Piece(TRAIL, player_id))

    if not board.contains(target) or not board.is_empty(target):
        crashed = replace(rider, direction=direction)
        return state.with_eliminated(
            player_id, board=board, move=move, payload=_swap(state, crashed)
        )

    board = board.with_piece(target, Piece(LIGHTCYCLE, player_id))
    moved = Rider(player_id=player_id, position=target, direction=direction)
    return state.derive(board=board, move=move, payload=_swap(state, moved))


def _swap(state: State, rider: Rider) -> Tuple[Rider, ...]:
    return tuple(rider if r.player_id == rider.player_id else r for r in riders_of(state))


def field_for_bots(state: State) -> str:
    """Comma separated field as bots see it: '.' empty, 'x' trail, '<id>' a rider."""
    cells = []
    for row in state.board.cells:
        for piece in row:
            if piece is None:
                cells.append(".")
            elif piece.kind == LIGHTCYCLE:
                cells.append(str(piece.owner))
            else:
                cells.append("x")
    return ",".join(cells)
