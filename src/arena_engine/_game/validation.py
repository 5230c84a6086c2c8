# Area: Game
"""
arena_engine._game.validation — Move validation chain
=====================================================

Validators are pure predicates over an immutable (Move, State) pair.
The chain runs them in registration order and stops at the first
applicable validator that rejects the move; validators after it are
not evaluated.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .state import Move, State
from ..errors import ValidationRejection

logger = logging.getLogger("arena_engine.validation")


class MoveValidator(ABC):
    """One rule a move has to satisfy."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def is_applicable(self, move: Move, state: State) -> bool:
        """Does this rule concern ``move`` at all?"""

    @abstractmethod
    def is_valid(self, move: Move, state: State) -> bool:
        """The actual check; only called when applicable."""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of running the chain over one move."""
    move: Move
    rejected_by: Optional[str] = None
    evaluated: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.rejected_by is None

    def raise_for_rejection(self) -> None:
        if self.rejected_by is not None:
            raise ValidationRejection(self.rejected_by, self.move.player_id, self.move.raw)


class MoveValidationChain:
    """Ordered composition of MoveValidators."""

    def __init__(self, validators: Iterable[MoveValidator] = ()):
        self._validators: List[MoveValidator] = list(validators)

    def register(self, validator: MoveValidator) -> "MoveValidationChain":
        self._validators.append(validator)
        return self

    @property
    def validators(self) -> Tuple[MoveValidator, ...]:
        return tuple(self._validators)

    def validate(self, move: Move, state: State) -> ValidationResult:
        evaluated: List[str] = []
        for validator in self._validators:
            if not validator.is_applicable(move, state):
                continue
            evaluated.append(validator.name)
            if not validator.is_valid(move, state):
                logger.info(
                    "Move %r from player %s rejected by %s",
                    move.raw, move.player_id, validator.name,
                    extra={"player_id": move.player_id, "turn": state.turn},
                )
                return ValidationResult(move, validator.name, tuple(evaluated))
        return ValidationResult(move, None, tuple(evaluated))


class ActivePlayerValidator(MoveValidator):
    """Only the active player may move."""

    def is_applicable(self, move: Move, state: State) -> bool:
        return state.active_player is not None

    def is_valid(self, move: Move, state: State) -> bool:
        return move.player_id == state.active_player and move.player_id not in state.eliminated
