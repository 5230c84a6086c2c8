# Area: Shared
"""
arena_engine.cli — Command-line interface
=========================================

Provides the CLI entry point for running one game.

Usage:
    python -m arena_engine --bot "python my_bot.py"                 # same bot for every id
    python -m arena_engine --bot "python a.py" --bot "python b.py"  # one bot per id
    python -m arena_engine --config config.json --bot ...           # base game options
    python -m arena_engine --input game.txt --bot-file p1.txt --bot-file p2.txt  # offline

The driving environment talks to the engine over stdin/stdout. For offline
runs, --input replays its transcript from a file and --bot-file takes bot
answers from files instead of starting processes.
Settings can also come from the environment (or a .env file):
    ARENA_GAME       game to run (default: lightriders)
    ARENA_LOG_FILE   JSON log file path (default: arena_engine.log)
    ARENA_LOG_LEVEL  logging level name (default: INFO)
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from dotenv import load_dotenv

from ._engine.orchestrator import GameEngine
from ._shared.io_handler import EnvironmentIO
from ._shared.logging_config import log_engine_error, setup_logging
from ._shared.scripted_channel import ScriptedChannel
from .errors import ArenaEngineError, ConfigurationError
from .games import available_games, get_game

logger = logging.getLogger("arena_engine.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arena engine - run a turn-based game between bot processes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m arena_engine --bot "python bot.py"
  python -m arena_engine --game lightriders --bot "./bot1" --bot "./bot2"
  python -m arena_engine --config config.json --bot "python bot.py" --verbose
  python -m arena_engine --input game.txt --bot-file p1.txt --bot-file p2.txt
        """,
    )

    parser.add_argument(
        "--game",
        type=str,
        default=os.environ.get("ARENA_GAME", "lightriders"),
        help=f"Game to run (available: {', '.join(available_games())})",
    )

    parser.add_argument(
        "--bot",
        dest="bots",
        action="append",
        default=[],
        help="Command that starts a bot; give once to reuse it for every bot id",
    )

    parser.add_argument(
        "--bot-file",
        dest="bot_files",
        action="append",
        default=[],
        help="File of scripted bot answers, one per line; replaces --bot",
    )

    parser.add_argument(
        "--input",
        type=str,
        help="Read the environment transcript from this file instead of stdin",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON file with base game options",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=os.environ.get("ARENA_LOG_FILE", "arena_engine.log"),
        help="Path to the JSON log file",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )

    return parser.parse_args(argv)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load base game options from a JSON file."""
    if not config_path:
        return {}
    path = Path(config_path)
    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Config file {path} is not valid JSON", details=[str(e)]
        ) from e
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    return config


def get_log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    name = os.environ.get("ARENA_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def open_input(input_path: Optional[str]) -> Optional[TextIO]:
    """Open the environment transcript for an offline run, or None for stdin."""
    if not input_path:
        return None
    try:
        return open(input_path, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Input file {input_path} cannot be read", details=[str(e)]
        ) from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)
    setup_logging(log_file_path=args.log_file, level=get_log_level(args))

    if not args.bots and not args.bot_files:
        print("Error: at least one --bot command or --bot-file is required.", file=sys.stderr)
        return 1
    if args.bots and args.bot_files:
        print("Error: --bot and --bot-file cannot be combined.", file=sys.stderr)
        return 1

    try:
        rules = get_game(args.game)
        base_options = load_config(args.config)
        input_stream = open_input(args.input)
    except ConfigurationError as e:
        log_engine_error(e)
        return 1

    if args.bot_files:
        logger.info("Offline run: bot answers from %s", ", ".join(args.bot_files))
        commands, factory = args.bot_files, ScriptedChannel
    else:
        commands, factory = args.bots, None

    engine = GameEngine(
        rules=rules,
        bot_commands=commands,
        io_handler=EnvironmentIO(input_stream=input_stream),
        base_options=base_options,
        channel_factory=factory,
    )
    try:
        engine.run()
    except ArenaEngineError:
        return 1
    finally:
        if input_stream is not None:
            input_stream.close()
    return 0
