# Area: Test Fixtures
"""Shared fakes: scripted bot channels and a minimal counting game."""

import json
from collections import deque

import pytest

from arena_engine.config import EngineConfig
from arena_engine.errors import ProcessError
from arena_engine.game import GameRules
from arena_engine._game.player import Player
from arena_engine._game.state import Board, Move, State
from arena_engine._game.timebank import Timebank
from arena_engine._game.validation import MoveValidator


class FakeChannel:
    """Stands in for BotChannel; answers move requests from a script.

    A scripted entry that is an exception instance is raised instead of
    being answered. An empty script behaves like a bot that exited.
    """

    def __init__(self, command="fake", label="fake", player_id=None,
                 responses=(), elapsed_ms=10):
        self.command = command
        self.label = label
        self.player_id = player_id
        self.responses = deque(responses)
        self.elapsed_ms = elapsed_ms
        self.last_elapsed_ms = 0
        self.dump = []
        self.stderr = ""
        self.closed = False
        self.budgets = []

    def send_message(self, line):
        if self.closed:
            raise ProcessError(f"{self.label} is not running", player_id=self.player_id)
        self.dump.append(line)

    def request_move(self, move_type, budget_ms):
        self.send_message(f"action {move_type} {budget_ms}")
        self.budgets.append(budget_ms)
        if not self.responses:
            raise ProcessError(f"{self.label} exited", player_id=self.player_id)
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        self.last_elapsed_ms = self.elapsed_ms
        return response

    def close(self):
        self.closed = True


class KnownMoveValidator(MoveValidator):
    def is_applicable(self, move, state):
        return True

    def is_valid(self, move, state):
        return move.move_type is not None


class CountingRules(GameRules):
    """Players add to a shared counter; the game ends at ``target``."""

    name = "counting"

    def __init__(self, target=3):
        self.target = target

    def initial_state(self, players, config):
        return State(
            board=Board.empty(1),
            active_player=players[0].player_id if players else None,
            payload=0,
        )

    def parse_move(self, player, raw):
        token = raw.strip()
        return Move(player.player_id, raw, token if token in ("inc", "noop") else None)

    def validators(self):
        return [KnownMoveValidator()]

    def apply_move(self, state, player, move):
        step = 1 if move is not None and move.move_type == "inc" else 0
        return state.derive(payload=state.payload + step, move=move)

    def is_terminal(self, state):
        return state.payload >= self.target

    def get_winner(self, state):
        if state.move is not None and self.is_terminal(state):
            return state.move.player_id
        return None

    def get_score(self, state):
        return float(state.payload)

    def serialize_replay(self, history, config):
        return json.dumps([s.payload for s in history])


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def fake_channel():
    """Factory for scripted channels."""
    return FakeChannel


@pytest.fixture
def make_player():
    """Factory: make_player(player_id, responses=(), timebank_max=..., channel=...)."""

    def _make(player_id, responses=(), timebank_max=10000, time_per_move=500,
              channel=None, elapsed_ms=10):
        if channel is None:
            channel = FakeChannel(
                label=f"player{player_id}", player_id=player_id,
                responses=responses, elapsed_ms=elapsed_ms,
            )
        return Player(
            player_id=player_id,
            name=f"player{player_id}",
            channel=channel,
            timebank=Timebank(timebank_max, time_per_move),
        )

    return _make


@pytest.fixture
def counting_rules():
    return CountingRules(target=3)


@pytest.fixture
def counting_rules_cls():
    return CountingRules
