# Area: Shared
"""
arena_engine._shared.logging_config — Structured logging setup
==============================================================

Terminal lines go to stderr, colored when it is a TTY. The optional file
handler writes one JSON object per record.
stdout carries the environment protocol, so no handler may write there.
Also provides the structured error logging used on engine failures.
"""

from __future__ import annotations
import logging
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..errors import ArenaEngineError

# Package logger
logger = logging.getLogger("arena_engine")


# Fields engine code passes through ``extra=``
RECORD_FIELDS = ("player_id", "turn", "error_type")

LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


def _player_tag(record: logging.LogRecord) -> str:
    player_id = getattr(record, "player_id", None)
    turn = getattr(record, "turn", None)
    if player_id is None:
        return ""
    return f"[p{player_id}] " if turn is None else f"[p{player_id} t{turn}] "


class TerminalFormatter(logging.Formatter):
    """
    One line per record on stderr, tagged with the player (and turn) it
    concerns. Whole lines are colored by level when ``use_color`` is set.
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 use_color: bool = True):
        super().__init__(fmt, datefmt)
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.player_tag = _player_tag(record)
        line = super().formatMessage(record)
        color = LEVEL_COLORS.get(record.levelno) if self.use_color else None
        return f"{color}{line}{RESET}" if color else line


class JSONFormatter(logging.Formatter):
    """One JSON object per line; the timestamp is the record's own."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
            .isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in RECORD_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    log_file_path: Optional[str] = "arena_engine.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str or None
        Path to the JSON log file. None disables file logging.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("arena_engine")
    pkg_logger.setLevel(level)
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s %(levelname)-7s %(name)s: %(player_tag)s%(message)s",
        datefmt="%H:%M:%S",
        use_color=sys.stderr.isatty(),
    ))
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning("Could not create log file %s: %s", log_file_path, e)

    pkg_logger.propagate = False


def log_engine_error(error: "ArenaEngineError") -> None:
    """
    Log an engine error in the structured format.

    The formatted block goes straight to stderr; the log record keeps
    the error type and player for the JSON file.
    """
    print(error.format_error_log(), file=sys.stderr)
    log = logger.critical if error.fatal else logger.error
    log(
        "%s: %s", error.__class__.__name__, error.message,
        extra={
            "player_id": error.player_id,
            "error_type": error.error_type,
        },
    )
