"""
arena_engine.errors — Custom exception classes
==============================================

Defines the exception hierarchy for engine failures.
Each exception stores full context for structured logging.

Per-player failures (ProcessError, MoveTimeoutError, ValidationRejection)
are contained by eliminating the player. ConfigurationError, ProtocolError
and TransformError are fatal and abort the run.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from .error_formatter import format_error_block


class ArenaEngineError(Exception):
    """Base exception for all arena engine errors."""

    fatal = True
    error_type = "ENGINE_ERROR"
    component = "engine"

    def __init__(
        self,
        message: str,
        player_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[List[str]] = None,
    ):
        self.message = message
        self.player_id = player_id
        self.context = context or {}
        self.details = details or []
        super().__init__(message)

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.error_type,
            component=self.component,
            player_id=self.player_id,
            context={"message": self.message, **self.context},
            details=self.details,
            fatal=self.fatal,
        )


class ConfigurationError(ArenaEngineError):
    """Raised when required setup data is missing or malformed."""

    error_type = "CONFIGURATION_ERROR"
    component = "setup"


class ProtocolError(ArenaEngineError):
    """Raised on a malformed or unexpected message from the driving environment."""

    error_type = "PROTOCOL_ERROR"
    component = "environment"


class TransformError(ArenaEngineError):
    """Raised when the game transform fails on an already-validated move."""

    error_type = "TRANSFORM_ERROR"
    component = "processor"


class ProcessError(ArenaEngineError):
    """Raised when a bot process fails to start, exits, or closes its pipe."""

    fatal = False
    error_type = "PROCESS_ERROR"
    component = "bot_channel"


class MoveTimeoutError(ArenaEngineError, TimeoutError):
    """Raised when a bot does not answer within its budget."""

    fatal = False
    error_type = "MOVE_TIMEOUT"
    component = "bot_channel"

    def __init__(self, player_id: Optional[int], budget_ms: int, elapsed_ms: int):
        self.budget_ms = budget_ms
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"No response within {budget_ms}ms (waited {elapsed_ms}ms)",
            player_id=player_id,
            context={"budget_ms": budget_ms, "elapsed_ms": elapsed_ms},
        )


class ValidationRejection(ArenaEngineError):
    """Raised when a move fails the validation chain."""

    fatal = False
    error_type = "VALIDATION_REJECTION"
    component = "validation"

    def __init__(self, validator_name: str, player_id: Optional[int], raw_move: Optional[str]):
        self.validator_name = validator_name
        self.raw_move = raw_move
        super().__init__(
            f"Move {raw_move!r} rejected by {validator_name}",
            player_id=player_id,
            context={"validator": validator_name, "raw_move": raw_move},
        )
