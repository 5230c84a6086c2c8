# Area: Shared Tests
"""Tests for logging configuration."""

import json
import logging
import sys

import pytest

from arena_engine._shared.logging_config import JSONFormatter, TerminalFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord(
        "arena_engine.test", logging.WARNING, __file__, 1, "player %s slow", (2,), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_package_logger():
    pkg_logger = logging.getLogger("arena_engine")
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield pkg_logger
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


class TestFormatters:
    """Tests for the terminal and JSON formatters."""

    def test_json_formatter_fields(self):
        """JSON lines carry the message and known extras."""
        data = json.loads(JSONFormatter().format(make_record(player_id=2, turn=7)))
        assert data["level"] == "WARNING"
        assert data["logger"] == "arena_engine.test"
        assert data["message"] == "player 2 slow"
        assert data["player_id"] == 2
        assert data["turn"] == 7
        assert "error_type" not in data

    def test_json_timestamp_is_record_time(self):
        """The timestamp is when the record was made, not when it was written."""
        record = make_record()
        record.created = 0.0
        data = json.loads(JSONFormatter().format(record))
        assert data["timestamp"] == "1970-01-01T00:00:00.000+00:00"

    def test_json_skips_empty_extras(self):
        """An error without a player does not write player_id: null."""
        data = json.loads(JSONFormatter().format(make_record(player_id=None, error_type="X")))
        assert "player_id" not in data
        assert data["error_type"] == "X"

    def test_terminal_formatter_restores_levelname(self):
        """Colouring leaves the record itself untouched."""
        record = make_record()
        text = TerminalFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[33m" in text
        assert record.levelname == "WARNING"

    def test_terminal_player_tag(self):
        """Records about a player are tagged with its id and the turn."""
        formatter = TerminalFormatter("%(player_tag)s%(message)s", use_color=False)
        assert formatter.format(make_record(player_id=2, turn=7)) == "[p2 t7] player 2 slow"
        assert formatter.format(make_record(player_id=2)) == "[p2] player 2 slow"
        assert formatter.format(make_record()) == "player 2 slow"

    def test_terminal_without_color(self):
        text = TerminalFormatter("%(levelname)s %(message)s", use_color=False).format(make_record())
        assert text == "WARNING player 2 slow"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_never_logs_to_stdout(self, restore_package_logger, tmp_path):
        """stdout carries the protocol; handlers write to stderr and the file."""
        setup_logging(log_file_path=str(tmp_path / "logs" / "engine.log"))
        handlers = restore_package_logger.handlers
        assert len(handlers) == 2
        for handler in handlers:
            assert getattr(handler, "stream", None) is not sys.stdout
        assert (tmp_path / "logs" / "engine.log").exists()
        assert restore_package_logger.propagate is False

    def test_file_logging_disabled(self, restore_package_logger):
        setup_logging(log_file_path=None, level=logging.DEBUG)
        assert len(restore_package_logger.handlers) == 1
        assert restore_package_logger.level == logging.DEBUG
