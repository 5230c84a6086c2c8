# Area: Engine Tests
"""Tests for GameResult and PlayerReport."""

from arena_engine._engine.game_result import GameResult, PlayerReport


class TestGameResult:
    """Tests for the details payload."""

    def test_details_with_winner(self):
        """The winner id is sent as a string."""
        result = GameResult(winner_id=2, score=17, replay="{}", turns=17)
        assert result.details() == {"winner": "2", "score": 17}

    def test_details_draw(self):
        """No winner is reported as the string 'null'."""
        result = GameResult(winner_id=None, score=5, replay="{}", turns=5)
        assert result.details()["winner"] == "null"

    def test_players_default_empty(self):
        """Player reports default to an empty list."""
        assert GameResult(None, 0, "", 0).players == []


class TestPlayerReport:
    """Tests for PlayerReport defaults."""

    def test_defaults(self):
        report = PlayerReport(1, "player1", False, None, 10000)
        assert report.stderr == ""
        assert report.dump == []
