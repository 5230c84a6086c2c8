# Area: Engine
"""
arena_engine._engine.enums — Turn State Machine Enums
=====================================================

Defines the phases and events of the turn scheduler state machine.
"""

from enum import Enum


class TurnPhase(Enum):
    """
    Phases of one turn.

    State transitions:
    AWAITING_MOVE -> APPLYING (on MOVE_RECEIVED or MOVE_MISSING)
    AWAITING_MOVE -> TERMINAL (on GAME_OVER, nobody left to move)
    APPLYING -> CHECKING_TERMINAL (on STATE_APPLIED)
    CHECKING_TERMINAL -> AWAITING_MOVE (on NEXT_PLAYER)
    CHECKING_TERMINAL -> TERMINAL (on GAME_OVER)
    """
    AWAITING_MOVE = "AWAITING_MOVE"
    APPLYING = "APPLYING"
    CHECKING_TERMINAL = "CHECKING_TERMINAL"
    TERMINAL = "TERMINAL"


class TurnEvent(Enum):
    """
    Events that trigger turn phase transitions.

    - MOVE_RECEIVED: the active bot answered in time
    - MOVE_MISSING: the active bot timed out, crashed, or was already out
    - STATE_APPLIED: the next State was produced and recorded
    - NEXT_PLAYER: another non-eliminated player moves next
    - GAME_OVER: terminal state, no players left, or turn limit hit
    """
    MOVE_RECEIVED = "MOVE_RECEIVED"
    MOVE_MISSING = "MOVE_MISSING"
    STATE_APPLIED = "STATE_APPLIED"
    NEXT_PLAYER = "NEXT_PLAYER"
    GAME_OVER = "GAME_OVER"
