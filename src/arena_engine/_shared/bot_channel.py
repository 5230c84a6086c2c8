# Area: Shared
"""
arena_engine._shared.bot_channel — Bot process transport
========================================================

Line-based request/response channel to one bot process.

The bot's stdout is read without blocking through ``selectors`` so every
read can be bounded by the player's remaining time. stderr goes to a
temporary file and is collected when the channel closes; it is never
parsed, only handed on for diagnostics.

One request is outstanding at a time. Output that arrives after a request
timed out is discarded before the next request is sent.
"""

from __future__ import annotations

import logging
import os
import selectors
import shlex
import subprocess
import tempfile
import time
from collections import deque
from typing import Deque, List, Optional

from ..errors import MoveTimeoutError, ProcessError

logger = logging.getLogger("arena_engine.bot_channel")

READ_CHUNK = 4096
TERMINATE_GRACE_SECONDS = 1.0


class BotChannel:
    """Owns one bot process and its pipes."""

    def __init__(self, command: str, label: str, player_id: Optional[int] = None):
        self.command = command
        self.label = label
        self.player_id = player_id
        self.dump: List[str] = []
        self.stderr = ""
        self.last_elapsed_ms = 0
        self._buffer = b""
        self._lines: Deque[str] = deque()
        self._eof = False
        self._closed = False

        self._stderr_file = tempfile.TemporaryFile()
        try:
            self.proc = subprocess.Popen(
                shlex.split(command),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=self._stderr_file,
                bufsize=0,
            )
        except (OSError, ValueError) as e:
            self._stderr_file.close()
            self._closed = True
            raise ProcessError(
                f"{label} failed to start: {e}",
                player_id=player_id,
                context={"command": command},
            ) from e

        os.set_blocking(self.proc.stdout.fileno(), False)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self.proc.stdout, selectors.EVENT_READ)
        logger.info("Started %s (pid %s): %s", label, self.proc.pid, command)

    def __enter__(self) -> "BotChannel":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def is_alive(self) -> bool:
        return not self._closed and self.proc.poll() is None

    # ── Writing ───────────────────────────────────────────────

    def send_message(self, line: str) -> None:
        """Write one line to the bot's stdin."""
        if not self.is_alive():
            raise ProcessError(f"{self.label} is not running", player_id=self.player_id)
        try:
            self.proc.stdin.write((line + "\n").encode("utf-8"))
            self.proc.stdin.flush()
        except OSError as e:
            raise ProcessError(
                f"{self.label} stdin closed", player_id=self.player_id,
                context={"line": line},
            ) from e
        self.dump.append(line)
        logger.debug("[%s >>] %s", self.label, line)

    # ── Reading ───────────────────────────────────────────────

    def wait_for_message(self, expected: str, timeout_ms: Optional[int] = None) -> None:
        """Block until the bot sends a line equal to ``expected``."""
        deadline = None if timeout_ms is None else time.monotonic() + timeout_ms / 1000
        while True:
            line = self._read_line(deadline)
            if line is None:
                raise MoveTimeoutError(self.player_id, timeout_ms or 0, timeout_ms or 0)
            if line == expected:
                return

    def request_move(self, move_type: str, budget_ms: int) -> str:
        """
        Ask the bot for a move and wait at most ``budget_ms`` for its answer.

        Returns:
            The raw response line. ``last_elapsed_ms`` holds the time taken.

        Raises:
            MoveTimeoutError: If the answer took longer than the budget
            ProcessError: If the bot exited or its pipes closed
        """
        budget_ms = max(0, int(budget_ms))
        self._discard_pending()
        self.send_message(f"action {move_type} {budget_ms}")

        started = time.monotonic()
        line = self._read_line(started + budget_ms / 1000)
        elapsed_ms = int((time.monotonic() - started) * 1000)
        self.last_elapsed_ms = elapsed_ms

        if line is None or elapsed_ms > budget_ms:
            logger.warning(
                "%s timed out (budget %dms, waited %dms)", self.label, budget_ms, elapsed_ms
            )
            raise MoveTimeoutError(self.player_id, budget_ms, elapsed_ms)
        logger.debug("[%s <<] %s (%dms)", self.label, line, elapsed_ms)
        return line

    def _read_line(self, deadline: Optional[float]) -> Optional[str]:
        """Return the next non-empty line, or None once ``deadline`` passes."""
        while True:
            while self._lines:
                line = self._lines.popleft()
                if line:
                    return line
            if self._eof:
                raise ProcessError(
                    f"{self.label} exited while waiting for a response",
                    player_id=self.player_id,
                    context={"returncode": self.proc.poll()},
                )
            if deadline is None:
                timeout = None
            else:
                timeout = deadline - time.monotonic()
                if timeout <= 0:
                    return None
            if self._selector.select(timeout=timeout):
                self._fill()

    def _fill(self) -> None:
        """Move everything currently readable from stdout into the line queue."""
        fd = self.proc.stdout.fileno()
        while True:
            try:
                chunk = os.read(fd, READ_CHUNK)
            except BlockingIOError:
                break
            if not chunk:
                self._eof = True
                break
            self._buffer += chunk

        *complete, self._buffer = self._buffer.split(b"\n")
        if self._eof and self._buffer:
            complete.append(self._buffer)
            self._buffer = b""
        for raw in complete:
            self._lines.append(raw.decode("utf-8", errors="replace").strip())

    def _discard_pending(self) -> None:
        """Drop late output left over from an earlier timed-out request."""
        if not self._eof and self._selector.select(timeout=0):
            self._fill()
        if self._lines:
            logger.debug("%s: discarding %d late line(s)", self.label, len(self._lines))
            self._lines.clear()

    # ── Shutdown ──────────────────────────────────────────────

    def close(self) -> None:
        """Terminate the bot and collect its stderr. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        try:
            self.proc.stdin.close()
        except OSError as e:
            logger.debug("%s: stdin already closed (%s)", self.label, e)
        if self.proc.poll() is None:
            self.proc.terminate()
            try:
                self.proc.wait(timeout=TERMINATE_GRACE_SECONDS)
            except subprocess.TimeoutExpired:
                self.proc.kill()
                self.proc.wait()

        if not self._eof:
            self._fill()
        self.dump.extend(f"(unread) {line}" for line in self._lines if line)
        self._lines.clear()
        self._selector.close()
        self.proc.stdout.close()

        self._stderr_file.seek(0)
        self.stderr = self._stderr_file.read().decode("utf-8", errors="replace")
        self._stderr_file.close()
        logger.info("Closed %s (exit code %s)", self.label, self.proc.returncode)
