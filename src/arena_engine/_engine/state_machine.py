# Area: Engine
"""
arena_engine._engine.state_machine — Turn State Machine
=======================================================

Tracks which phase of a turn the scheduler is in and rejects
out-of-order transitions.
"""

import logging
from typing import List, Tuple

from .enums import TurnPhase, TurnEvent

logger = logging.getLogger("arena_engine.engine.state_machine")


# Valid state transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    TurnPhase.AWAITING_MOVE: {
        TurnEvent.MOVE_RECEIVED: TurnPhase.APPLYING,
        TurnEvent.MOVE_MISSING: TurnPhase.APPLYING,
        TurnEvent.GAME_OVER: TurnPhase.TERMINAL,
    },
    TurnPhase.APPLYING: {
        TurnEvent.STATE_APPLIED: TurnPhase.CHECKING_TERMINAL,
    },
    TurnPhase.CHECKING_TERMINAL: {
        TurnEvent.NEXT_PLAYER: TurnPhase.AWAITING_MOVE,
        TurnEvent.GAME_OVER: TurnPhase.TERMINAL,
    },
    TurnPhase.TERMINAL: {},
}


class TurnStateMachine:
    """
    State machine for one game's turn cycle.

    Attributes:
        current_phase: The phase the scheduler is currently in
        trail: Every (event, phase) pair taken, in order
    """

    def __init__(self):
        """Initialize state machine in AWAITING_MOVE."""
        self.current_phase = TurnPhase.AWAITING_MOVE
        self.trail: List[Tuple[TurnEvent, TurnPhase]] = []

    def can_transition(self, event: TurnEvent) -> bool:
        """
        Check if a transition is valid from the current phase.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        return event in TRANSITIONS.get(self.current_phase, {})

    def transition(self, event: TurnEvent) -> TurnPhase:
        """
        Execute a phase transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new phase after transition

        Raises:
            ValueError: If the transition is not valid from the current phase
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_phase.value}"
            )
        next_phase = TRANSITIONS[self.current_phase][event]
        logger.debug("Turn phase: %s → %s", self.current_phase.value, next_phase.value)
        self.current_phase = next_phase
        self.trail.append((event, next_phase))
        return next_phase

    @property
    def is_terminal(self) -> bool:
        return self.current_phase == TurnPhase.TERMINAL

    def reset(self) -> None:
        """Reset state machine to the start of a fresh game."""
        self.current_phase = TurnPhase.AWAITING_MOVE
        self.trail = []
