# Area: Shared Tests
"""Tests for ScriptedChannel, the file-backed bot channel."""

import pytest

from arena_engine._game.player import Player
from arena_engine._game.timebank import Timebank
from arena_engine._shared.scripted_channel import ScriptedChannel
from arena_engine.errors import ProcessError


def write_answers(tmp_path, text, name="answers.txt"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestScriptedChannel:
    """Tests for answering move requests from a file."""

    def test_answers_in_order(self, tmp_path):
        """Answers come back one per request; blank lines are skipped."""
        path = write_answers(tmp_path, "up\n\n  left \nPASS\n")
        with ScriptedChannel(path, "player1", 1) as channel:
            assert channel.request_move("move", 500) == "up"
            assert channel.request_move("move", 400) == "left"
            assert channel.request_move("move", 300) == "PASS"
            assert channel.last_elapsed_ms == 0
            assert channel.dump == ["action move 500", "action move 400", "action move 300"]

    def test_exhausted_file(self, tmp_path):
        """Running out of answers looks like a bot that exited."""
        channel = ScriptedChannel(write_answers(tmp_path, "up\n"), "player1", 1)
        channel.request_move("move", 500)
        with pytest.raises(ProcessError, match="exhausted") as exc_info:
            channel.request_move("move", 500)
        assert exc_info.value.player_id == 1

    def test_missing_file(self, tmp_path):
        """A missing answer file fails like a bot that cannot start."""
        with pytest.raises(ProcessError, match="cannot be read"):
            ScriptedChannel(str(tmp_path / "missing.txt"), "player2", 2)

    def test_wait_for_message(self, tmp_path):
        """Answers before the expected line are consumed."""
        channel = ScriptedChannel(write_answers(tmp_path, "noise\nready\nup\n"), "player1")
        channel.wait_for_message("ready")
        assert channel.remaining == 1
        with pytest.raises(ProcessError, match="ended before"):
            channel.wait_for_message("ready")

    def test_closed_channel_refuses_lines(self, tmp_path):
        channel = ScriptedChannel(write_answers(tmp_path, "up\n"), "player1", 1)
        channel.close()
        channel.close()
        assert not channel.is_alive()
        with pytest.raises(ProcessError, match="not running"):
            channel.send_message("settings timebank 1000")


class TestScriptedChannelWithPlayer:
    """Tests for a Player driven by a scripted channel."""

    def test_full_bank_offered(self, tmp_path):
        """Scripted answers take no time, so the bank stays full."""
        channel = ScriptedChannel(write_answers(tmp_path, "up\ndown\n"), "player1", 1)
        player = Player(1, "player1", channel, Timebank(1000, 100))
        assert player.request_move("move") == "up"
        assert player.request_move("move") == "down"
        assert player.timebank.remaining == 1000
        assert player.dump == ["action move 1000", "action move 1000"]

    def test_exhausted_file_eliminates(self, tmp_path):
        """A player whose answers ran out is eliminated."""
        channel = ScriptedChannel(write_answers(tmp_path, "up\n"), "player1", 1)
        player = Player(1, "player1", channel, Timebank(1000, 100))
        player.request_move("move")
        with pytest.raises(ProcessError):
            player.request_move("move")
        assert player.eliminated
        assert "exhausted" in player.elimination_reason
