"""Environment-driven settings for the tic-tac-toe server."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env(name: str, default: str) -> str:
    value = os.environ.get(name)
    if value is not None and value.strip():
        return value.strip()
    return default


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    bot_delay: float = 0.5


def load_settings() -> Settings:
    return Settings(
        host=_env("TICTACTOE_HOST", "0.0.0.0"),
        port=int(_env("TICTACTOE_PORT", "8000")),
        log_level=_env("TICTACTOE_LOG_LEVEL", "INFO").upper(),
        bot_delay=max(0.0, float(_env("TICTACTOE_BOT_DELAY", "0.5"))),
    )
