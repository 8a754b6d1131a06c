"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from reminder_bot.config import Config, parse_bool, resolve_state_dir

_ENV_VARS = (
    "REMINDER_BOT_HOST",
    "REMINDER_BOT_PORT",
    "REMINDER_BOT_CONFIRM_DURATIONS",
    "REMINDER_BOT_STATE_DIR",
    "STATE_DIR",
    "LOG_DIR",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = Config.from_env()
    assert config.host == "127.0.0.1"
    assert config.port == 8765
    assert config.confirm_durations is True
    assert config.log_level == "INFO"
    assert config.log_dir == resolve_state_dir() / "logs"


def test_overrides(clean_env, tmp_path):
    clean_env.setenv("REMINDER_BOT_HOST", "0.0.0.0")
    clean_env.setenv("REMINDER_BOT_PORT", "9000")
    clean_env.setenv("REMINDER_BOT_CONFIRM_DURATIONS", "off")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("LOG_DIR", str(tmp_path))

    config = Config.from_env()
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.confirm_durations is False
    assert config.log_level == "DEBUG"
    assert config.log_dir == tmp_path


def test_state_dir_from_env(clean_env, tmp_path):
    clean_env.setenv("REMINDER_BOT_STATE_DIR", str(tmp_path / "state"))
    assert resolve_state_dir() == tmp_path / "state"
    assert Config.from_env().log_dir == tmp_path / "state" / "logs"


def test_explicit_state_dir_expands_user():
    assert resolve_state_dir(Path("~/bot")) == Path.home() / "bot"


@pytest.mark.parametrize("value,expected", [
    ("1", True), ("TRUE", True), ("yes", True), ("on", True),
    ("0", False), ("false", False), ("No", False), ("off", False),
    ("maybe", True), (None, True),
])
def test_parse_bool(value, expected):
    assert parse_bool(value, True) is expected


@pytest.mark.parametrize("port", [0, 70000])
def test_validate_rejects_bad_port(clean_env, port):
    config = Config.from_env()
    config.port = port
    with pytest.raises(ValueError):
        config.validate()
