# Area: Shared
"""
Shared transport and logging used by the engine and the game layer.

This package contains:
- Bot process channel (one per player)
- File-backed channel for offline runs
- Driving environment line protocol
- Logging configuration
"""

from .bot_channel import BotChannel
from .io_handler import EnvironmentIO
from .scripted_channel import ScriptedChannel
from .logging_config import setup_logging, log_engine_error

__all__ = [
    "BotChannel",
    "EnvironmentIO",
    "ScriptedChannel",
    "setup_logging",
    "log_engine_error",
]
