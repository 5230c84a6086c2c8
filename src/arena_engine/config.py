# Area: Shared
"""
arena_engine.config — Engine Configuration
==========================================

The frozen EngineConfig value and the parser for the setup messages the
driving environment sends between ``initialize`` and ``start``.

Configuration is accumulated while setup messages arrive, validated once
when ``start`` is received, and never mutated afterwards.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import ConfigurationError

logger = logging.getLogger("arena_engine.config")

# Setup commands recognised from the driving environment
SETUP_COMMANDS = {"bot_ids", "configuration", "config", "start"}

DEFAULT_TIMEBANK_MAX = 10000
DEFAULT_TIME_PER_MOVE = 500


class RejectionPolicy(str, Enum):
    """What happens to a player whose move fails validation."""
    IGNORE = "ignore"          # move dropped, player keeps previous heading
    ELIMINATE = "eliminate"    # player removed from the game


class EngineConfig(BaseModel):
    """
    Process-wide game configuration.

    Known keys are typed; anything else the environment sends is kept
    verbatim for game collaborators and read through ``get``.
    All times are in milliseconds.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    timebank_max: int = Field(default=DEFAULT_TIMEBANK_MAX, ge=0)
    time_per_move: int = Field(default=DEFAULT_TIME_PER_MOVE, ge=0)
    board_size: Optional[int] = Field(default=None, gt=0)
    max_turns: Optional[int] = Field(default=None, gt=0)
    invalid_move_policy: RejectionPolicy = RejectionPolicy.IGNORE
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_time_budget(self) -> "EngineConfig":
        if self.time_per_move > self.timebank_max:
            raise ValueError(
                f"time_per_move ({self.time_per_move}) exceeds timebank_max ({self.timebank_max})"
            )
        return self

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "EngineConfig":
        """
        Build a config from raw options.

        Raises:
            ConfigurationError: If any option has the wrong type or range
        """
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            details = [
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                "Invalid configuration", context={"options": options}, details=details
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Read a known or game-specific option."""
        if key in type(self).model_fields:
            value = getattr(self, key)
            return default if value is None else value
        return (self.model_extra or {}).get(key, default)

    def require(self, *keys: str) -> None:
        """
        Check that game-specific required keys are present.

        Raises:
            ConfigurationError: If any key is missing
        """
        missing = [k for k in keys if self.get(k) is None]
        if missing:
            raise ConfigurationError(
                f"Missing required config keys: {missing}",
                details=[f"{k}: required by the selected game" for k in missing],
            )

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@dataclass
class SetupInput:
    """Everything received from the environment before ``start``."""
    bot_ids: List[int] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    started: bool = False


def parse_setup_line(line: str, setup: SetupInput) -> None:
    """
    Parse one setup message into ``setup``.

    Unknown commands are logged and skipped.

    Raises:
        ConfigurationError: If bot_ids or the configuration JSON is malformed
    """
    line = line.strip()
    if not line:
        return
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command == "bot_ids":
        setup.bot_ids = _parse_bot_ids(argument)
    elif command in ("configuration", "config"):
        setup.options.update(_parse_configuration(argument))
    elif command == "start":
        setup.started = True
    else:
        logger.warning("Ignoring unknown setup message: %s", command)


def _parse_bot_ids(argument: str) -> List[int]:
    try:
        ids = [int(part) for part in argument.split(",") if part.strip()]
    except ValueError as e:
        raise ConfigurationError(
            f"Malformed bot_ids: {argument!r}", context={"bot_ids": argument}
        ) from e
    if not ids:
        raise ConfigurationError("bot_ids message carries no identifiers")
    if len(set(ids)) != len(ids):
        raise ConfigurationError(f"Duplicate bot ids: {ids}")
    return ids


def _parse_configuration(argument: str) -> Dict[str, Any]:
    try:
        raw = json.loads(argument)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            "Configuration is not valid JSON",
            context={"configuration": argument},
            details=[str(e)],
        ) from e
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration must be a JSON object, got {type(raw).__name__}"
        )
    return {key: _unwrap(value) for key, value in raw.items()}


def _unwrap(value: Any) -> Any:
    # Wrapper format: {"type": "integer", "value": 16}
    if isinstance(value, dict) and "value" in value and set(value) <= {"type", "value"}:
        return value["value"]
    return value


def build_config(setup: SetupInput, base_options: Optional[Dict[str, Any]] = None) -> EngineConfig:
    """
    Validate the collected setup input and freeze it into an EngineConfig.

    Options from the environment override ``base_options`` (e.g. a config file).

    Raises:
        ConfigurationError: If no player identifiers were received or options are invalid
    """
    if not setup.bot_ids:
        raise ConfigurationError("No player identifiers received before start")
    merged: Dict[str, Any] = dict(base_options or {})
    merged.update(setup.options)
    return EngineConfig.from_options(merged)


def parse_setup_lines(lines: Iterable[str]) -> SetupInput:
    """Parse a whole setup transcript at once."""
    setup = SetupInput()
    for line in lines:
        parse_setup_line(line, setup)
        if setup.started:
            break
    return setup
