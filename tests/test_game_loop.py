# Area: Engine Tests
"""Tests for the TurnScheduler."""

import pytest

from arena_engine.config import EngineConfig
from arena_engine.errors import MoveTimeoutError, TransformError
from arena_engine._engine.enums import TurnEvent, TurnPhase
from arena_engine._engine.game_loop import TurnScheduler
from arena_engine._game.processor import StateTransitionProcessor


def run_game(rules, players, max_turns=None, config=None):
    processor = StateTransitionProcessor(rules, config or EngineConfig())
    scheduler = TurnScheduler(max_turns=max_turns)
    initial = processor.initial_state(players)
    final = scheduler.run(initial, processor, players)
    return scheduler, final


class TestTurnScheduler:
    """Tests for turn order and termination."""

    def test_plays_until_terminal(self, counting_rules, make_player):
        """Players alternate until the game reports a terminal State."""
        players = [make_player(1, ["inc"] * 5), make_player(2, ["inc"] * 5)]
        scheduler, final = run_game(counting_rules, players)

        assert final.payload == 3
        assert final.turn == 3
        assert scheduler.phase == TurnPhase.TERMINAL
        assert [s.move.player_id for s in scheduler.history.states()[1:]] == [1, 2, 1]

    def test_history_is_linked(self, counting_rules, make_player):
        """Every recorded State follows the previous one."""
        players = [make_player(1, ["inc"] * 5), make_player(2, ["inc"] * 5)]
        scheduler, final = run_game(counting_rules, players)

        states = scheduler.history.states()
        assert states[0].is_initial
        for before, after in zip(states, states[1:]):
            assert after.previous is before
            assert after.turn == before.turn + 1
        assert final.chain() == list(states)

    def test_active_player_stamped(self, counting_rules, make_player):
        """Each State names who moves next."""
        players = [make_player(1, ["inc"] * 5), make_player(2, ["inc"] * 5)]
        scheduler, _ = run_game(counting_rules, players)
        assert [s.active_player for s in scheduler.history.states()[:3]] == [1, 2, 1]

    def test_turn_updates_sent_before_request(self, counting_rules, make_player, monkeypatch):
        """Game updates reach the bot ahead of its action request."""
        monkeypatch.setattr(
            counting_rules, "turn_updates", lambda state, player: [f"update round {state.turn}"]
        )
        players = [make_player(1, ["inc"] * 5), make_player(2, ["inc"] * 5)]
        run_game(counting_rules, players)
        assert players[0].dump[:2] == ["update round 0", "action move 10000"]

    def test_max_turns(self, counting_rules_cls, make_player):
        """The engine stops at the turn limit."""
        rules = counting_rules_cls(target=100)
        players = [make_player(1, ["inc"] * 5), make_player(2, ["inc"] * 5)]
        scheduler, final = run_game(rules, players, max_turns=2)
        assert final.turn == 2
        assert scheduler.state_machine.trail[-1] == (TurnEvent.GAME_OVER, TurnPhase.TERMINAL)

    def test_already_terminal(self, counting_rules_cls, make_player):
        """A game over before the first move asks nobody."""
        rules = counting_rules_cls(target=0)
        players = [make_player(1, ["inc"])]
        scheduler, final = run_game(rules, players)
        assert final.is_initial
        assert players[0].channel.budgets == []
        assert len(scheduler.history) == 1


class TestTurnSchedulerFailures:
    """Tests for players that time out or crash."""

    def test_crashed_player_is_skipped(self, counting_rules, make_player):
        """A dead bot is eliminated; the others keep playing."""
        players = [make_player(1, ["inc"] * 5), make_player(2, [])]
        scheduler, final = run_game(counting_rules, players)

        assert players[1].eliminated
        assert final.eliminated == frozenset({2})
        assert final.payload == 3
        assert final.turn == 4
        movers = [s.active_player for s in scheduler.history.states()[2:-1]]
        assert 2 not in movers

    def test_timeout_eliminates(self, counting_rules, make_player):
        """A timeout removes the player and exhausts its timebank."""
        players = [
            make_player(1, ["inc"] * 5),
            make_player(2, [MoveTimeoutError(2, 10000, 10001)]),
        ]
        _, final = run_game(counting_rules, players)
        assert players[1].elimination_reason == "timeout"
        assert players[1].timebank.remaining == 0
        assert 2 in final.eliminated

    def test_everyone_gone(self, counting_rules_cls, make_player):
        """With no player left the game ends."""
        rules = counting_rules_cls(target=100)
        players = [make_player(1, []), make_player(2, [])]
        scheduler, final = run_game(rules, players)
        assert final.eliminated == frozenset({1, 2})
        assert final.active_player is None
        assert scheduler.phase == TurnPhase.TERMINAL

    def test_game_rule_elimination_reaches_player(self, counting_rules, make_player, monkeypatch):
        """An elimination decided by the game marks the Player too."""
        monkeypatch.setattr(
            counting_rules, "apply_move",
            lambda state, player, move: state.with_eliminated(player.player_id),
        )
        players = [make_player(1, ["inc"]), make_player(2, ["inc"])]
        run_game(counting_rules, players)
        assert players[0].eliminated
        assert players[0].elimination_reason == "eliminated by game rules"

    def test_next_player_must_be_able_to_move(self, counting_rules, make_player, monkeypatch):
        """Picking an eliminated player to move is a broken game."""
        monkeypatch.setattr(counting_rules, "next_player", lambda state, players: 99)
        players = [make_player(1, ["inc"]), make_player(2, ["inc"])]
        with pytest.raises(TransformError):
            run_game(counting_rules, players)
