"""Tests for the tiered computer opponent and minimax search."""

import random

from tictactoe.ai import BotPlayer, Difficulty, choose_move, minimax
from tictactoe.game import Board, GameState, Mark, evaluate

E, X, O = Mark.EMPTY, Mark.X, Mark.O


def test_medium_takes_immediate_win():
    cells = [X, X, E, E, O, E, E, E, E]
    assert choose_move(cells, X, O, Difficulty.MEDIUM) == 2


def test_medium_prefers_win_over_block():
    # O can win on 8, X threatens 2.
    cells = [X, X, E, E, E, E, O, O, E]
    assert choose_move(cells, O, X, Difficulty.MEDIUM) == 8


def test_medium_blocks_when_no_win():
    cells = [X, X, E, E, O, E, E, E, E]
    assert choose_move(cells, O, X, Difficulty.MEDIUM) == 2


def test_medium_falls_back_to_random_empty_cell():
    cells = [X, E, E, E, E, E, E, E, E]
    empty = list(range(1, 9))
    for seed in range(5):
        move = choose_move(cells, O, X, Difficulty.MEDIUM, random.Random(seed))
        assert move == random.Random(seed).choice(empty)
    picks = {
        choose_move(cells, O, X, Difficulty.MEDIUM, random.Random(seed))
        for seed in range(20)
    }
    assert len(picks) > 1


def test_easy_picks_only_empty_cells():
    rng = random.Random(42)
    cells = [X, O, X, E, O, E, O, X, E]
    for _ in range(50):
        assert choose_move(cells, O, X, Difficulty.EASY, rng) in (3, 5, 8)


def test_no_legal_move_on_full_board():
    cells = [X, O, X, X, O, O, O, X, X]
    for difficulty in Difficulty:
        assert choose_move(cells, O, X, difficulty) is None


def test_minimax_root_score_is_draw():
    result = minimax([E] * 9, X, X, O)
    assert result.score == 0
    assert result.index is not None


def test_minimax_leaves_board_unchanged():
    board = Board(cells=[X, E, E, E, O, E, E, E, E], current_player=X)
    before = list(board.cells)
    minimax(board.cells, X, X, O)
    assert board.cells == before


def test_minimax_blocks_immediate_threat():
    # O holds 0 and 1; anything but 2 loses.
    cells = [O, O, E, E, X, E, E, E, X]
    assert minimax(cells, X, X, O).index == 2


def test_minimax_score_negates_when_marks_swap():
    cells = [X, E, E, E, O, E, E, E, X]
    as_o = minimax(cells, O, O, X)
    swapped = [{X: O, O: X}.get(c, E) for c in cells]
    as_x = minimax(swapped, X, X, O)
    assert as_o.score == as_x.score
    mirrored = minimax(cells, O, X, O)
    assert mirrored.score == -as_o.score


def test_hard_vs_hard_is_a_draw():
    board = Board()
    bots = {X: BotPlayer(X, Difficulty.HARD), O: BotPlayer(O, Difficulty.HARD)}
    while not evaluate(board).finished:
        mover = board.current_player
        assert board.place_mark(bots[mover].choose(board), mover)
    assert evaluate(board).state is GameState.DRAW


def test_hard_never_loses_to_random_play():
    rng = random.Random(7)
    for _ in range(5):
        board = Board()
        bot = BotPlayer(O, Difficulty.HARD)
        while not evaluate(board).finished:
            if board.current_player == X:
                board.place_mark(rng.choice(board.empty_indices()))
            else:
                board.place_mark(bot.choose(board))
        assert evaluate(board).winner != X
