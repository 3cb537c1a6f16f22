"""Entry point for running the game via ``python -m tictactoe``."""

from __future__ import annotations

import logging

import uvicorn

from .config import load_settings


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe web server."""

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("tictactoe").info(
        "Serving tic-tac-toe on %s:%d", settings.host, settings.port
    )
    uvicorn.run(
        "tictactoe.ui:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
