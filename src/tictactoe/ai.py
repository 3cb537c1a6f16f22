"""Computer opponent: random, win/block heuristic, and exhaustive minimax."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .game import WINNING_LINES, Board, Mark, cells_of, empty_indices, has_won


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


WIN_SCORE = 10
LOSS_SCORE = -10
DRAW_SCORE = 0


@dataclass(frozen=True)
class MinimaxResult:
    index: Optional[int]
    score: int


# ---------- Minimax ----------


def minimax(
    board: Union[Board, Sequence[Mark]],
    side_to_move: Mark,
    ai_mark: Mark,
    human_mark: Mark,
) -> MinimaxResult:
    """Exhaustive minimax with ``ai_mark`` maximizing.

    Terminal scores are +10 / -10 / 0 regardless of depth, so a quick win
    and a slow win look the same. Ties keep the lowest index.
    """
    cells = list(cells_of(board))
    return _search(cells, side_to_move, ai_mark, human_mark)


def _search(
    cells: List[Mark], side: Mark, ai_mark: Mark, human_mark: Mark
) -> MinimaxResult:
    if has_won(cells, human_mark):
        return MinimaxResult(None, LOSS_SCORE)
    if has_won(cells, ai_mark):
        return MinimaxResult(None, WIN_SCORE)
    spots = empty_indices(cells)
    if not spots:
        return MinimaxResult(None, DRAW_SCORE)

    nxt = human_mark if side == ai_mark else ai_mark
    moves: List[Tuple[int, int]] = []
    for idx in spots:
        cells[idx] = side
        result = _search(cells, nxt, ai_mark, human_mark)
        cells[idx] = Mark.EMPTY
        moves.append((idx, result.score))

    best_index, best_score = moves[0]
    for idx, score in moves[1:]:
        if side == ai_mark:
            if score > best_score:
                best_index, best_score = idx, score
        elif score < best_score:
            best_index, best_score = idx, score
    return MinimaxResult(best_index, best_score)


# ---------- Tiered policy ----------


def find_completing_cell(cells: Sequence[Mark], mark: Mark) -> Optional[int]:
    """Empty cell of the first line holding two ``mark`` and one gap."""
    for line in WINNING_LINES:
        trio = [cells[i] for i in line]
        if trio.count(mark) == 2 and trio.count(Mark.EMPTY) == 1:
            return line[trio.index(Mark.EMPTY)]
    return None


def random_move(
    cells: Sequence[Mark], rng: Optional[random.Random] = None
) -> Optional[int]:
    spots = empty_indices(cells)
    if not spots:
        return None
    return (rng or random).choice(spots)


def heuristic_move(
    cells: Sequence[Mark],
    ai_mark: Mark,
    human_mark: Mark,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    if not empty_indices(cells):
        return None
    win = find_completing_cell(cells, ai_mark)
    if win is not None:
        return win
    block = find_completing_cell(cells, human_mark)
    if block is not None:
        return block
    return random_move(cells, rng)


def choose_move(
    board: Union[Board, Sequence[Mark]],
    ai_mark: Mark,
    human_mark: Mark,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Pick the opponent's next cell, or None when no cell is free."""
    cells = cells_of(board)
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.EASY:
        return random_move(cells, rng)
    if difficulty is Difficulty.MEDIUM:
        return heuristic_move(cells, ai_mark, human_mark, rng)
    return minimax(cells, ai_mark, ai_mark, human_mark).index


@dataclass
class BotPlayer:
    """Computer opponent bound to a mark and a difficulty tier.

    - BotPlayer(mark=Mark.O, difficulty=Difficulty.HARD)
    - choose(board) -> cell index or None
    """

    mark: Mark
    difficulty: Difficulty = Difficulty.EASY
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def opponent(self) -> Mark:
        return self.mark.other

    def choose(self, board: Union[Board, Sequence[Mark]]) -> Optional[int]:
        return choose_move(board, self.mark, self.opponent, self.difficulty, self.rng)
