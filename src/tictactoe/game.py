"""Board model and win/draw detection for classic 3x3 tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union


class Mark(str, Enum):
    """Cell value: one of the two player marks or empty."""

    EMPTY = ""
    X = "X"
    O = "O"

    @property
    def other(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("Empty cell has no opponent")


class GameState(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


Line = Tuple[int, int, int]

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class Outcome:
    """Derived game status; recomputed from the cells on demand."""

    state: GameState
    winner: Optional[Mark] = None
    line: Optional[Line] = None

    @property
    def finished(self) -> bool:
        return self.state is not GameState.IN_PROGRESS


IN_PROGRESS = Outcome(GameState.IN_PROGRESS)
DRAW = Outcome(GameState.DRAW)


# ---------- Outcome evaluation ----------


def cells_of(board: Union["Board", Sequence[Mark]]) -> Sequence[Mark]:
    return board.cells if isinstance(board, Board) else board


def empty_indices(board: Union["Board", Sequence[Mark]]) -> List[int]:
    return [i for i, c in enumerate(cells_of(board)) if c == Mark.EMPTY]


def has_won(board: Union["Board", Sequence[Mark]], mark: Mark) -> bool:
    cells = cells_of(board)
    return any(all(cells[i] == mark for i in line) for line in WINNING_LINES)


def evaluate(board: Union["Board", Sequence[Mark]]) -> Outcome:
    """Return the status of ``board`` without modifying it.

    Lines are scanned in ``WINNING_LINES`` order and the first complete one
    is reported, so the result is deterministic even for positions that
    cannot arise in a legal game.
    """
    cells = cells_of(board)
    for line in WINNING_LINES:
        a, b, c = line
        v = cells[a]
        if v != Mark.EMPTY and v == cells[b] == cells[c]:
            return Outcome(GameState.WON, winner=Mark(v), line=line)
    if all(c != Mark.EMPTY for c in cells):
        return DRAW
    return IN_PROGRESS


# ---------- Board ----------


@dataclass
class Board:
    cells: List[Mark] = field(default_factory=lambda: [Mark.EMPTY] * 9)
    current_player: Mark = Mark.X

    def is_full(self) -> bool:
        return all(c != Mark.EMPTY for c in self.cells)

    def empty_indices(self) -> List[int]:
        return empty_indices(self.cells)

    def place_mark(self, index: int, mark: Optional[Mark] = None) -> bool:
        """Put ``mark`` (default: side to move) on ``index``.

        Returns False and leaves the board untouched when the index is off
        the grid, the cell is taken, or the game is already decided.
        """
        mark = self.current_player if mark is None else mark
        if mark == Mark.EMPTY:
            return False
        if not 0 <= index < 9:
            return False
        if self.cells[index] != Mark.EMPTY:
            return False
        if evaluate(self.cells).finished:
            return False
        self.cells[index] = mark
        self.current_player = mark.other
        return True

    def reset(self, first_player: Mark = Mark.X) -> None:
        self.cells = [Mark.EMPTY] * 9
        self.current_player = first_player

    def clone(self) -> "Board":
        return Board(cells=self.cells.copy(), current_player=self.current_player)
