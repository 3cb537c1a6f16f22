"""Tic-tac-toe package exposing game logic, the computer opponent, and the web application."""

from .ai import BotPlayer, Difficulty, choose_move, minimax
from .controller import GameController
from .game import Board, Mark, evaluate
from .ui import app

__all__ = [
    "Board",
    "BotPlayer",
    "Difficulty",
    "GameController",
    "Mark",
    "app",
    "choose_move",
    "evaluate",
    "minimax",
]
