"""Tests for environment-driven settings."""

from tictactoe.config import Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("TICTACTOE_HOST", "TICTACTOE_PORT", "TICTACTOE_LOG_LEVEL", "TICTACTOE_BOT_DELAY"):
        monkeypatch.delenv(name, raising=False)
    assert load_settings() == Settings()


def test_overrides(monkeypatch):
    monkeypatch.setenv("TICTACTOE_PORT", "9001")
    monkeypatch.setenv("TICTACTOE_LOG_LEVEL", "debug")
    monkeypatch.setenv("TICTACTOE_BOT_DELAY", "-1")
    settings = load_settings()
    assert settings.port == 9001
    assert settings.log_level == "DEBUG"
    assert settings.bot_delay == 0.0
