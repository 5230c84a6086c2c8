# Area: Game
"""
arena_engine._game.state — Immutable game model
===============================================

Board, Piece, Move and State snapshots. Nothing here is mutated after
construction: every change produces a new object, and each State keeps a
back-reference to the State it was derived from.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, Iterator, List, Optional, Sequence, Tuple
from urllib.parse import quote, unquote

EMPTY_CELL = "."
OWNER_SEPARATOR = "@"


@dataclass(frozen=True, order=True)
class Coordinate:
    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Piece:
    """A piece on the board: what it is and which player owns it."""
    kind: str
    owner: Optional[int] = None

    def to_token(self) -> str:
        """``kind`` or ``kind@owner``; the kind is percent-encoded."""
        # '.' is the empty cell, so it is escaped too
        kind = quote(self.kind, safe="").replace(".", "%2E")
        return kind if self.owner is None else f"{kind}{OWNER_SEPARATOR}{self.owner}"

    @classmethod
    def from_token(cls, token: str) -> "Piece":
        kind, separator, owner = token.partition(OWNER_SEPARATOR)
        return cls(kind=unquote(kind), owner=int(owner) if separator else None)


@dataclass(frozen=True)
class Board:
    """Fixed-size grid; cells[y][x] holds at most one Piece."""
    width: int
    height: int
    cells: Tuple[Tuple[Optional[Piece], ...], ...]

    @classmethod
    def empty(cls, width: int, height: Optional[int] = None) -> "Board":
        height = width if height is None else height
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        row = tuple(None for _ in range(width))
        return cls(width=width, height=height, cells=tuple(row for _ in range(height)))

    def contains(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def piece_at(self, coord: Coordinate) -> Optional[Piece]:
        if not self.contains(coord):
            raise IndexError(f"{coord} is outside the {self.width}x{self.height} board")
        return self.cells[coord.y][coord.x]

    def is_empty(self, coord: Coordinate) -> bool:
        return self.piece_at(coord) is None

    def with_piece(self, coord: Coordinate, piece: Optional[Piece]) -> "Board":
        """Return a copy of this board with ``coord`` set to ``piece``."""
        if not self.contains(coord):
            raise IndexError(f"{coord} is outside the {self.width}x{self.height} board")
        row = list(self.cells[coord.y])
        row[coord.x] = piece
        cells = self.cells[:coord.y] + (tuple(row),) + self.cells[coord.y + 1:]
        return replace(self, cells=cells)

    def pieces(self) -> Iterator[Tuple[Coordinate, Piece]]:
        for y, row in enumerate(self.cells):
            for x, piece in enumerate(row):
                if piece is not None:
                    yield Coordinate(x, y), piece

    def to_string(self) -> str:
        """Lossless text form: rows separated by ';', cells by ','."""
        return ";".join(
            ",".join(EMPTY_CELL if p is None else p.to_token() for p in row)
            for row in self.cells
        )

    @classmethod
    def from_string(cls, text: str) -> "Board":
        rows = [row.split(",") for row in text.split(";")]
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Board rows have unequal widths")
        cells = tuple(
            tuple(None if token == EMPTY_CELL else Piece.from_token(token) for token in row)
            for row in rows
        )
        return cls(width=width, height=len(rows), cells=cells)


@dataclass(frozen=True)
class Move:
    """A raw move as answered by a bot; unvalidated until it passes the chain."""
    player_id: int
    raw: str
    move_type: Optional[str] = None
    target: Optional[Coordinate] = None


@dataclass(frozen=True)
class State:
    """
    Immutable game snapshot.

    ``previous`` links back to the State this one was derived from, so the
    whole game forms a singly linked chain ending at the initial State.
    ``payload`` holds immutable game-specific data (e.g. rider headings).
    ``rejection`` names the validator that rejected the producing move.
    """
    board: Board
    active_player: Optional[int]
    move: Optional[Move] = None
    previous: Optional["State"] = field(default=None, repr=False, compare=False)
    turn: int = 0
    eliminated: FrozenSet[int] = frozenset()
    payload: Any = None
    rejection: Optional[str] = None

    @property
    def is_initial(self) -> bool:
        return self.previous is None

    def derive(self, **changes: Any) -> "State":
        """Build the successor State; ``previous`` and ``turn`` are set here."""
        changes.setdefault("move", None)
        changes.setdefault("rejection", None)
        return replace(self, previous=self, turn=self.turn + 1, **changes)

    def with_eliminated(self, player_id: int, **changes: Any) -> "State":
        return self.derive(eliminated=self.eliminated | {player_id}, **changes)

    def chain(self) -> List["State"]:
        """Return the history ending at this State, oldest first."""
        states: List[State] = []
        seen = set()
        current: Optional[State] = self
        while current is not None:
            if id(current) in seen:
                raise ValueError("State history contains a cycle")
            seen.add(id(current))
            states.append(current)
            current = current.previous
        states.reverse()
        return states


class History:
    """
    Append-only sequence of States indexed by turn number.

    Only the scheduler appends; everyone else reads.
    """

    def __init__(self, initial_state: State):
        if not initial_state.is_initial:
            raise ValueError("History must start at an initial State")
        self._states: List[State] = [initial_state]

    @classmethod
    def from_chain(cls, final_state: State) -> "History":
        states = final_state.chain()
        history = cls(states[0])
        for state in states[1:]:
            history.append(state)
        return history

    def append(self, state: State) -> None:
        if state.previous is not self._states[-1]:
            raise ValueError(
                f"State for turn {state.turn} does not follow turn {self._states[-1].turn}"
            )
        self._states.append(state)

    @property
    def initial(self) -> State:
        return self._states[0]

    @property
    def current(self) -> State:
        return self._states[-1]

    def states(self) -> Sequence[State]:
        return tuple(self._states)

    def __getitem__(self, turn: int) -> State:
        return self._states[turn]

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[State]:
        return iter(tuple(self._states))
