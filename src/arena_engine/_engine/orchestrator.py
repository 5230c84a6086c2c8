# Area: Engine
"""
arena_engine._engine.orchestrator — Game engine lifecycle
=========================================================

setup → pre-game → turn loop → finish.

Setup talks only to the driving environment until ``start`` arrives and
the configuration has been validated; no bot process is started before
that. Bot processes are released on every exit path, including fatal
errors, which are reported to the environment and re-raised. Anything
else that escapes a run is wrapped into an ArenaEngineError first.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .game_loop import TurnScheduler
from .game_result import GameResult, PlayerReport
from ..config import EngineConfig, SetupInput, build_config, parse_setup_line
from ..errors import ArenaEngineError, ConfigurationError, ProcessError
from ..game import GameRules
from .._game.player import Player
from .._game.processor import StateTransitionProcessor
from .._game.state import State
from .._shared.bot_channel import BotChannel
from .._shared.io_handler import EnvironmentIO
from .._shared.scripted_channel import ScriptedChannel
from .._shared.logging_config import log_engine_error

logger = logging.getLogger("arena_engine.engine.orchestrator")

Channel = Union[BotChannel, ScriptedChannel]
ChannelFactory = Callable[[str, str, int], Channel]


class GameEngine:
    """
    Runs one game between external bot processes.

    Usage
    -----
        from arena_engine import GameEngine
        from arena_engine.games import get_game

        engine = GameEngine(
            rules=get_game("lightriders"),
            bot_commands=["python bots/left_bot.py", "python bots/right_bot.py"],
        )
        result = engine.run()
    """

    def __init__(self, rules: GameRules, bot_commands: Sequence[str],
                 io_handler: Optional[EnvironmentIO] = None,
                 base_options: Optional[Dict[str, Any]] = None,
                 channel_factory: Optional[ChannelFactory] = None,
                 scheduler: Optional[TurnScheduler] = None):
        self.rules = rules
        self.bot_commands = list(bot_commands)
        self.io = io_handler if io_handler is not None else EnvironmentIO()
        self.base_options = dict(base_options or {})
        self.channel_factory = channel_factory if channel_factory is not None else BotChannel
        self.scheduler = scheduler
        self.config: Optional[EngineConfig] = None
        self.players: List[Player] = []
        self.processor: Optional[StateTransitionProcessor] = None
        self.result: Optional[GameResult] = None

    # ── Lifecycle ─────────────────────────────────────────────

    def run(self) -> GameResult:
        """Run the whole game and return its result."""
        logger.info("Starting %s engine...", self.rules.name)
        try:
            self.setup()
            if self.processor is None:
                raise ArenaEngineError("Processor has not been set")

            initial_state = self.processor.initial_state(self.players)
            logger.info("Running pre-game phase...")
            self.processor.pre_game_phase(initial_state)

            logger.info("Starting game loop...")
            self.scheduler.run(initial_state, self.processor, self.players)

            self.close_players()
            return self.finish(initial_state)
        except ArenaEngineError as e:
            log_engine_error(e)
            self._report_abort(e)
            raise
        except Exception as e:
            error = ArenaEngineError(
                f"Unexpected {type(e).__name__}: {e}",
                context={"game": self.rules.name},
            )
            log_engine_error(error)
            self._report_abort(error)
            raise error from e
        finally:
            self.close_players()

    def setup(self) -> None:
        """
        Handshake with the environment, read configuration and bot ids,
        start the bots and send them the game settings.

        Raises:
            ConfigurationError: Missing or malformed setup data
            ProtocolError: The environment went away before ``start``
        """
        logger.info("Setting up engine. Waiting for initialize...")
        self.io.wait_for_message("initialize")
        self.io.send_message("ok")

        logger.info("Got initialize. Parsing settings...")
        setup = SetupInput()
        while not setup.started:
            parse_setup_line(self.io.get_next_message(), setup)

        config = build_config(setup, self.base_options)
        self.rules.validate_configuration(config)
        commands = self._resolve_commands(setup.bot_ids)
        self.config = config

        logger.info("Got start. Starting %d bots...", len(commands))
        self.players = [
            self._create_player(player_id, command)
            for player_id, command in zip(setup.bot_ids, commands)
        ]
        self.processor = StateTransitionProcessor(self.rules, config)
        if self.scheduler is None:
            self.scheduler = TurnScheduler(max_turns=config.max_turns)

        logger.info("Sending game settings to bots...")
        for player in self.players:
            self._send_settings(player)
        logger.info("Settings sent. Setting up engine done...")

    def finish(self, initial_state: State) -> GameResult:
        """Report the result and replay to the environment."""
        history = self.scheduler.history
        if history is None or history.initial is not initial_state:
            raise ArenaEngineError("Game loop history does not start at the initial state")

        final_state = history.current
        winner_id = self.processor.get_winner(final_state)
        result = GameResult(
            winner_id=winner_id,
            score=self.processor.get_score(final_state),
            replay=self.processor.serialize_replay(history.states()),
            turns=final_state.turn,
            players=[self._player_report(p) for p in self.players],
        )

        self.io.send_message("end")
        self.io.wait_for_message("details")
        self.io.send_message(json.dumps(result.details()))
        self.io.wait_for_message("game")
        self.io.send_message(result.replay)

        logger.info("Finished: winner %s, score %s", result.details()["winner"], result.score)
        self.result = result
        return result

    def close_players(self) -> None:
        for player in self.players:
            player.close()

    # ── Helpers ───────────────────────────────────────────────

    def _resolve_commands(self, bot_ids: List[int]) -> List[str]:
        if not self.bot_commands:
            raise ConfigurationError("No bot commands were given to the engine")
        if len(self.bot_commands) == 1:
            return self.bot_commands * len(bot_ids)
        if len(self.bot_commands) != len(bot_ids):
            raise ConfigurationError(
                f"{len(bot_ids)} bot ids but {len(self.bot_commands)} bot commands",
                context={"bot_ids": bot_ids},
            )
        return list(self.bot_commands)

    def _create_player(self, player_id: int, command: str) -> Player:
        label = f"player{player_id}"
        try:
            channel: Optional[Channel] = self.channel_factory(command, label, player_id)
        except ProcessError as e:
            log_engine_error(e)
            channel = None
        player = self.rules.create_player(player_id, channel, self.config)
        if channel is None:
            player.eliminate("bot failed to start")
        return player

    def _send_settings(self, player: Player) -> None:
        player.send_setting("player_names", ",".join(p.name for p in self.players))
        player.send_setting("your_bot", player.name)
        player.send_setting("your_botid", player.player_id)
        player.send_setting("timebank", self.config.timebank_max)
        player.send_setting("time_per_move", self.config.time_per_move)
        for key, value in self.rules.game_settings(player, self.players, self.config):
            player.send_setting(key, value)

    def _player_report(self, player: Player) -> PlayerReport:
        return PlayerReport(
            player_id=player.player_id,
            name=player.name,
            eliminated=player.eliminated,
            elimination_reason=player.elimination_reason,
            timebank_remaining=player.timebank.remaining,
            stderr=player.stderr,
            dump=player.dump,
        )

    def _report_abort(self, error: ArenaEngineError) -> None:
        try:
            self.io.send_error(error)
        except OSError as e:
            logger.error("Could not report abort to the environment: %s", e)
