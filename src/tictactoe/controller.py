"""Turn sequencing between the human player and the computer opponent."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .ai import BotPlayer, Difficulty
from .game import Board, GameState, Mark, Outcome, evaluate

logger = logging.getLogger(__name__)


@dataclass
class GameController:
    """One in-memory game session.

    The board is created on construction and on every reset. When the bot
    is on move, ``bot_thinking`` gates human input until ``run_bot_turn`` is
    called with the token handed out by ``pending_bot_token``. Every reset
    bumps ``generation`` so a bot move scheduled before the reset is dropped.
    """

    human_mark: Mark = Mark.X
    difficulty: Difficulty = Difficulty.EASY
    bot_enabled: bool = False
    board: Board = field(default_factory=Board)
    bot_thinking: bool = False
    generation: int = 0
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _pending: Optional[int] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.human_mark = Mark(self.human_mark)
        self.difficulty = Difficulty(self.difficulty)
        if self.human_mark == Mark.EMPTY:
            raise ValueError("Human mark must be X or O")
        self.reset()

    # ---- derived state ----

    @property
    def bot_mark(self) -> Mark:
        return self.human_mark.other

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.board)

    def pending_bot_token(self) -> Optional[int]:
        with self.lock:
            return self._pending if self.bot_thinking else None

    # ---- human input ----

    def rejection_reason(self, index: int) -> Optional[str]:
        """Why a human move on ``index`` would be refused, or None."""
        with self.lock:
            if self.outcome.finished:
                return "Game already finished"
            if self.bot_thinking:
                return "Bot is completing its move"
            if self.bot_enabled and self.board.current_player == self.bot_mark:
                return "It is the bot's turn"
            if not 0 <= index < 9:
                return "Cell index out of range"
            if self.board.cells[index] != Mark.EMPTY:
                return "Cell already occupied"
            return None

    def play_human(self, index: int) -> bool:
        with self.lock:
            reason = self.rejection_reason(index)
            if reason is not None:
                logger.debug("Rejected move %s: %s", index, reason)
                return False
            player = self.board.current_player
            if not self.board.place_mark(index, player):
                return False
            self.move_log.append({"player": player.value, "index": index})
            logger.debug("%s played %d", player.value, index)
            self._schedule_bot()
            return True

    # ---- bot ----

    def _schedule_bot(self) -> None:
        if (
            self.bot_enabled
            and not self.outcome.finished
            and self.board.current_player == self.bot_mark
        ):
            self.bot_thinking = True
            self._pending = self.generation

    def run_bot_turn(self, token: int) -> Optional[int]:
        """Apply the scheduled bot move; stale or unneeded calls are ignored."""
        with self.lock:
            if token != self.generation or not self.bot_thinking:
                logger.debug("Discarding stale bot move (token %s)", token)
                return None
            try:
                if not self.bot_enabled or self.outcome.finished:
                    return None
                if self.board.current_player != self.bot_mark:
                    return None
                bot = BotPlayer(mark=self.bot_mark, difficulty=self.difficulty, rng=self.rng)
                index = bot.choose(self.board)
                if index is None or not self.board.place_mark(index, self.bot_mark):
                    return None
                self.move_log.append({"player": self.bot_mark.value, "index": index})
                logger.debug(
                    "Bot (%s, %s) played %d",
                    self.bot_mark.value,
                    self.difficulty.value,
                    index,
                )
                return index
            finally:
                self.bot_thinking = False
                self._pending = None

    # ---- session settings ----

    def reset(self) -> None:
        with self.lock:
            self.generation += 1
            self.board.reset(Mark.X)
            self.bot_thinking = False
            self._pending = None
            self.move_log = []
            self._schedule_bot()

    def choose_mark(self, mark: Mark) -> None:
        mark = Mark(mark)
        if mark == Mark.EMPTY:
            raise ValueError("Human mark must be X or O")
        with self.lock:
            self.human_mark = mark
            self.reset()

    def set_difficulty(self, difficulty: Difficulty) -> None:
        with self.lock:
            self.difficulty = Difficulty(difficulty)

    def set_bot_enabled(self, enabled: bool) -> None:
        with self.lock:
            self.bot_enabled = bool(enabled)
            self.reset()

    def toggle_bot(self) -> None:
        with self.lock:
            self.set_bot_enabled(not self.bot_enabled)

    # ---- presentation ----

    def _message(self, outcome: Outcome) -> str:
        if outcome.state is GameState.WON:
            return f"Player {outcome.winner.value} wins!"
        if outcome.state is GameState.DRAW:
            return "Game is a draw!"
        if self.bot_thinking:
            return "Bot is thinking..."
        return f"Player {self.board.current_player.value}'s turn"

    def snapshot(self) -> Dict[str, object]:
        with self.lock:
            outcome = self.outcome
            state: Dict[str, object] = {
                "cells": [c.value for c in self.board.cells],
                "currentPlayer": self.board.current_player.value,
                "status": outcome.state.value,
                "winner": outcome.winner.value if outcome.winner else None,
                "winningLine": list(outcome.line) if outcome.line else None,
                "humanMark": self.human_mark.value,
                "botMark": self.bot_mark.value,
                "difficulty": self.difficulty.value,
                "botEnabled": self.bot_enabled,
                "botThinking": self.bot_thinking,
                "availableMoves": [] if outcome.finished else self.board.empty_indices(),
                "moveLog": list(self.move_log),
                "message": self._message(outcome),
            }
            if self.move_log:
                state["lastMove"] = self.move_log[-1]
            return state
