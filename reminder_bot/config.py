"""Configuration management for the reminder bot gateway."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_STATE_DIR = Path.home() / ".local" / "state" / "reminder_bot"


def resolve_state_dir(base_dir: Optional[Path] = None) -> Path:
    """Resolve the base state directory.

    Handles both ~ and $VAR expansion for compatibility with systemd
    EnvironmentFile and shell scripts.
    """
    if base_dir is not None:
        return Path(os.path.expandvars(str(base_dir))).expanduser()
    env_dir = os.getenv("REMINDER_BOT_STATE_DIR") or os.getenv("STATE_DIR")
    if env_dir:
        return Path(os.path.expandvars(env_dir)).expanduser()
    return DEFAULT_STATE_DIR


def parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass
class Config:
    """Configuration for the gateway"""

    # Server settings
    host: str
    port: int

    # Dialog behavior
    confirm_durations: bool

    # Logging
    log_level: str
    log_dir: Path

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""
        host = os.getenv("REMINDER_BOT_HOST", "127.0.0.1")
        port = int(os.getenv("REMINDER_BOT_PORT", "8765"))

        confirm_durations = parse_bool(
            os.getenv("REMINDER_BOT_CONFIRM_DURATIONS"), True
        )

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_dir = Path(os.getenv("LOG_DIR") or resolve_state_dir() / "logs").expanduser()

        return cls(
            host=host,
            port=port,
            confirm_durations=confirm_durations,
            log_level=log_level,
            log_dir=log_dir,
        )

    def validate(self) -> None:
        """Validate configuration"""
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid REMINDER_BOT_PORT: {self.port}")

        if not self.host:
            raise ValueError("REMINDER_BOT_HOST must not be empty")
