# Area: Lightriders
"""
arena_engine.games.lightriders.replay — Replay document
=======================================================

Serializes the whole history (initial State first) to a single-line JSON
document for the visualizer, and reads it back.
"""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

from .logic import riders_of
from ..._game.state import Board, State
from ...types import Replay, ReplayRider, ReplayState


def _state_entry(state: State) -> ReplayState:
    riders: List[ReplayRider] = [
        {
            "id": rider.player_id,
            "x": rider.position.x,
            "y": rider.position.y,
            "direction": rider.direction,
            "alive": rider.player_id not in state.eliminated,
        }
        for rider in riders_of(state)
    ]
    return {
        "turn": state.turn,
        "active": state.active_player,
        "move": state.move.raw if state.move is not None else None,
        "mover": state.move.player_id if state.move is not None else None,
        "rejection": state.rejection,
        "field": state.board.to_string(),
        "riders": riders,
    }


def serialize_replay(history: Sequence[State], winner: Optional[int]) -> str:
    if not history:
        raise ValueError("Cannot serialize an empty history")
    initial = history[0]
    replay: Replay = {
        "settings": {
            "width": initial.board.width,
            "height": initial.board.height,
            "players": [rider.player_id for rider in riders_of(initial)],
        },
        "states": [_state_entry(state) for state in history],
        "winner": winner,
    }
    return json.dumps(replay, separators=(",", ":"))


def load_replay(text: str) -> Replay:
    return json.loads(text)


def replay_boards(text: str) -> List[Board]:
    """Rebuild every Board of a replay, in turn order."""
    return [Board.from_string(entry["field"]) for entry in load_replay(text)["states"]]
