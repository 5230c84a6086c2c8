# Area: Shared Tests
"""Tests for the engine exception hierarchy and error formatting."""

import pytest

from arena_engine.errors import (
    ArenaEngineError,
    ConfigurationError,
    MoveTimeoutError,
    ProcessError,
    ProtocolError,
    TransformError,
    ValidationRejection,
)
from arena_engine.error_formatter import indent_json


class TestErrorHierarchy:
    """Tests for fatal vs contained errors."""

    @pytest.mark.parametrize("cls", [ConfigurationError, ProtocolError, TransformError])
    def test_run_level_errors_are_fatal(self, cls):
        """Configuration, protocol and transform errors abort the run."""
        assert cls("boom").fatal is True

    def test_player_level_errors_are_contained(self):
        """Process, timeout and rejection errors only affect one player."""
        assert ProcessError("gone").fatal is False
        assert MoveTimeoutError(1, 100, 150).fatal is False
        assert ValidationRejection("SomeValidator", 1, "jump").fatal is False

    def test_all_errors_share_base(self):
        """Every engine error can be caught as ArenaEngineError."""
        for error in (ConfigurationError("x"), ProcessError("x"), MoveTimeoutError(1, 1, 2)):
            assert isinstance(error, ArenaEngineError)

    def test_move_timeout_is_timeout_error(self):
        """MoveTimeoutError can also be caught as the builtin TimeoutError."""
        error = MoveTimeoutError(2, 500, 731)
        assert isinstance(error, TimeoutError)
        assert error.player_id == 2
        assert error.budget_ms == 500
        assert error.elapsed_ms == 731
        assert "500ms" in error.message

    def test_validation_rejection_names_validator(self):
        """ValidationRejection keeps the validator name and the raw move."""
        error = ValidationRejection("MoveTypeValidator", 1, "jump")
        assert error.validator_name == "MoveTypeValidator"
        assert error.raw_move == "jump"
        assert "MoveTypeValidator" in str(error)


class TestFormatErrorLog:
    """Tests for the structured error block."""

    def test_fatal_block_header(self):
        """Fatal errors say the run was aborted."""
        log = ConfigurationError("Missing board_size").format_error_log()
        assert "RUN ABORTED" in log
        assert "CONFIGURATION_ERROR" in log
        assert "Missing board_size" in log

    def test_contained_block_names_player(self):
        """Contained errors name the affected player."""
        log = ProcessError("stdin closed", player_id=3).format_error_log()
        assert "PLAYER CONTAINED" in log
        assert "Player:       3" in log

    def test_details_are_listed(self):
        """Details are rendered as bullet points."""
        log = ConfigurationError("bad", details=["board_size: required"]).format_error_log()
        assert "DETAILS" in log
        assert "• board_size: required" in log

    def test_indent_json_falls_back_to_str(self):
        """Values json cannot encode are stringified."""
        text = indent_json({"value": object()})
        assert "object object" in text
