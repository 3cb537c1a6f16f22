"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import random
import time
import uuid
from typing import Dict, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import Difficulty
from .config import load_settings
from .controller import GameController
from .game import Mark

logger = logging.getLogger(__name__)

SESSIONS: Dict[str, GameController] = {}
app = FastAPI(title="Tic-Tac-Toe", description="Tic-tac-toe against a three-tier bot")

_settings = load_settings()
BOT_THINK_DELAY: Tuple[float, float] = (_settings.bot_delay, _settings.bot_delay)


def _require_player_mark(value: Mark) -> Mark:
    if value == Mark.EMPTY:
        raise ValueError("Mark must be X or O")
    return value


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    model_config = ConfigDict(populate_by_name=True)

    human_mark: Mark = Field(default=Mark.X, alias="humanMark")
    difficulty: Difficulty = Field(default=Difficulty.EASY)
    bot_enabled: bool = Field(default=False, alias="botEnabled")

    @field_validator("human_mark")
    @classmethod
    def ensure_player_mark(cls, value: Mark) -> Mark:
        return _require_player_mark(value)


class MoveRequest(BaseModel):
    """Request payload for claiming a cell."""

    index: int = Field(ge=0, le=8)


class MarkRequest(BaseModel):
    mark: Mark

    @field_validator("mark")
    @classmethod
    def ensure_player_mark(cls, value: Mark) -> Mark:
        return _require_player_mark(value)


class DifficultyRequest(BaseModel):
    difficulty: Difficulty


class BotRequest(BaseModel):
    """``enabled`` omitted means toggle."""

    enabled: Optional[bool] = None


def _create_session(request: NewGameRequest) -> Tuple[str, GameController]:
    """Create a new game session and register it for later access."""

    session = GameController(
        human_mark=request.human_mark,
        difficulty=request.difficulty,
        bot_enabled=request.bot_enabled,
    )
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info(
        "Created game %s (human=%s, bot=%s, difficulty=%s)",
        session_id,
        session.human_mark.value,
        session.bot_enabled,
        session.difficulty.value,
    )
    return session_id, session


def _get_session(game_id: str) -> GameController:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_bot_turn(game_id: str, token: int) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, random.uniform(*BOT_THINK_DELAY)))
    session.run_bot_turn(token)


def _schedule_bot(
    game_id: str, session: GameController, background_tasks: BackgroundTasks
) -> None:
    token = session.pending_bot_token()
    if token is not None:
        background_tasks.add_task(_run_bot_turn, game_id, token)


def _serialize_session(game_id: str, session: GameController) -> Dict[str, object]:
    state = session.snapshot()
    state["id"] = game_id
    return state


@app.post("/api/game")
def create_game(
    background_tasks: BackgroundTasks, request: Optional[NewGameRequest] = None
) -> Dict[str, object]:
    game_id, session = _create_session(request or NewGameRequest())
    _schedule_bot(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        reason = session.rejection_reason(request.index)
        if reason is not None:
            raise HTTPException(status_code=400, detail=reason)
        session.play_human(request.index)
    _schedule_bot(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str, background_tasks: BackgroundTasks) -> Dict[str, object]:
    session = _get_session(game_id)
    session.reset()
    _schedule_bot(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/mark")
def choose_mark(
    game_id: str, request: MarkRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    session.choose_mark(request.mark)
    _schedule_bot(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/difficulty")
def set_difficulty(game_id: str, request: DifficultyRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    session.set_difficulty(request.difficulty)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/bot")
def set_bot(
    game_id: str, background_tasks: BackgroundTasks, request: Optional[BotRequest] = None
) -> Dict[str, object]:
    session = _get_session(game_id)
    if request is None or request.enabled is None:
        session.toggle_bot()
    else:
        session.set_bot_enabled(request.enabled)
    _schedule_bot(game_id, session, background_tasks)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-Tac-Toe</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: clamp(1.5rem, 4vw, 2.5rem);
        width: min(520px, 100%);
      }
      h1 {
        margin: 0 0 1rem;
        text-align: center;
        letter-spacing: 0.06em;
      }
      .controls {
        display: flex;
        flex-wrap: wrap;
        gap: 0.6rem;
        justify-content: center;
        align-items: center;
        margin-bottom: 1rem;
      }
      button {
        font-size: 1rem;
        padding: 0.5rem 0.9rem;
        border-radius: 999px;
        border: 1px solid rgba(60, 70, 120, 0.25);
        background: white;
        cursor: pointer;
        font-family: inherit;
      }
      button.active {
        background: #3a66ff;
        color: white;
      }
      #status {
        text-align: center;
        font-weight: 600;
        margin-bottom: 1rem;
      }
      .board-grid {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        width: min(330px, 100%);
        margin: 0 auto 1.5rem;
      }
      .cell {
        aspect-ratio: 1;
        font-size: 2.6rem;
        font-weight: 700;
        border-radius: 14px;
      }
      .cell.crossed {
        background: #ffe08a;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-Tac-Toe</h1>
      <div class=\"controls\">
        <button id=\"choose-x\">Play X</button>
        <button id=\"choose-o\">Play O</button>
        <button id=\"toggle-bot-button\">Bot: <span id=\"bot-indicator\">OFF</span></button>
      </div>
      <div class=\"controls\">
        <button id=\"easy\" data-difficulty=\"easy\">Easy</button>
        <button id=\"medium\" data-difficulty=\"medium\">Medium</button>
        <button id=\"hard\" data-difficulty=\"hard\">Hard</button>
      </div>
      <div id=\"status\" role=\"status\">
        Current player: <span id=\"current-player\">X</span>
        <div id=\"message\"></div>
      </div>
      <div id=\"board\" class=\"board-grid\"></div>
      <div class=\"controls\">
        <button id=\"reset-button\">Reset</button>
      </div>
    </main>
    <script>
      const boardContainer = document.getElementById('board');
      const currentPlayerEl = document.getElementById('current-player');
      const messageEl = document.getElementById('message');
      const botIndicator = document.getElementById('bot-indicator');
      const difficultyButtons = document.querySelectorAll('[data-difficulty]');

      let gameId = null;
      let gameState = null;
      let botPollHandle = null;

      async function api(path, body) {
        const response = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body || {}),
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || 'Request failed');
        }
        return payload;
      }

      function render(state) {
        gameState = state;
        currentPlayerEl.textContent = state.currentPlayer;
        messageEl.textContent = state.message;
        botIndicator.textContent = state.botEnabled ? 'ON' : 'OFF';
        difficultyButtons.forEach((button) => {
          button.classList.toggle('active', button.dataset.difficulty === state.difficulty);
        });
        document.getElementById('choose-x').classList.toggle('active', state.humanMark === 'X');
        document.getElementById('choose-o').classList.toggle('active', state.humanMark === 'O');
        boardContainer.innerHTML = '';
        state.cells.forEach((value, index) => {
          const cell = document.createElement('button');
          cell.className = 'cell';
          cell.dataset.index = index;
          cell.textContent = value;
          if (state.winningLine && state.winningLine.includes(index)) {
            cell.classList.add('crossed');
          }
          cell.addEventListener('click', () => play(index));
          boardContainer.appendChild(cell);
        });
        schedulePoll();
      }

      function schedulePoll() {
        if (botPollHandle) {
          clearTimeout(botPollHandle);
          botPollHandle = null;
        }
        if (gameState && gameState.botThinking) {
          botPollHandle = setTimeout(async () => {
            const response = await fetch(`/api/game/${gameId}`);
            render(await response.json());
          }, 250);
        }
      }

      async function run(path, body) {
        try {
          render(await api(path, body));
        } catch (error) {
          messageEl.textContent = error.message;
        }
      }

      function play(index) {
        if (!gameState || gameState.botThinking || gameState.cells[index]) {
          return;
        }
        run(`/api/game/${gameId}/move`, { index });
      }

      document.getElementById('reset-button').addEventListener('click', () =>
        run(`/api/game/${gameId}/reset`)
      );
      document.getElementById('toggle-bot-button').addEventListener('click', () =>
        run(`/api/game/${gameId}/bot`)
      );
      document.getElementById('choose-x').addEventListener('click', () =>
        run(`/api/game/${gameId}/mark`, { mark: 'X' })
      );
      document.getElementById('choose-o').addEventListener('click', () =>
        run(`/api/game/${gameId}/mark`, { mark: 'O' })
      );
      difficultyButtons.forEach((button) => {
        button.addEventListener('click', () =>
          run(`/api/game/${gameId}/difficulty`, { difficulty: button.dataset.difficulty })
        );
      });

      api('/api/game', {}).then((state) => {
        gameId = state.id;
        render(state);
      });
    </script>
  </body>
</html>
"""
