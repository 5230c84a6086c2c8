"""
arena_engine.types — TypedDict schemas for protocol payloads
============================================================

Structure of the JSON documents the engine sends to the environment and
of the replay the reference game produces.

    >>> ResultDetails.__annotations__
    {'winner': <class 'str'>, 'score': <class 'float'>}
"""

from typing import List, Optional, TypedDict


# ============================================
# ``details`` reply
# ============================================

class ResultDetails(TypedDict):
    """Reply to the environment's ``details`` request.

    Fields
    ------
    winner : str
        Winning bot id as a string, or ``"null"`` when there is none.
    score : float
        Game-defined score (Lightriders: turns played).
    """
    winner: str
    score: float


# ============================================
# Replay document (Lightriders)
# ============================================

class ReplayRider(TypedDict):
    """One rider inside a replay state."""
    id: int
    x: int
    y: int
    direction: str
    alive: bool


class ReplayState(TypedDict):
    """One State of the history, in turn order."""
    turn: int
    active: Optional[int]
    move: Optional[str]
    mover: Optional[int]
    rejection: Optional[str]
    field: str
    riders: List[ReplayRider]


class ReplaySettings(TypedDict):
    """Static game settings recorded at the top of a replay."""
    width: int
    height: int
    players: List[int]


class Replay(TypedDict):
    """Full replay document."""
    settings: ReplaySettings
    states: List[ReplayState]
    winner: Optional[int]
