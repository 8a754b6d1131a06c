"""
Logging Setup
Configures rotating file + console logging for the gateway and its sessions.
"""
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from reminder_bot.config import resolve_state_dir

_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
_BACKUP_COUNT = 5


def _resolve_log_dir(log_dir: Optional[Union[str, Path]]) -> Path:
    if log_dir is None:
        return resolve_state_dir() / "logs"
    return Path(os.path.expanduser(str(log_dir)))


def setup_logging(
    name: str,
    log_dir: Optional[Union[str, Path]] = None,
    log_level: str = "INFO",
    console_output: bool = True,
) -> logging.Logger:
    """
    Setup logging for a named component.

    Creates rotating file handler and optional console handler.

    Args:
        name: Logger name (e.g. "reminder_bot")
        log_dir: Directory for log files (defaults to <state dir>/logs)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also log to console

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("reminder_bot", log_dir="/tmp/logs")
        >>> logger.info("Gateway started")
    """
    log_dir = _resolve_log_dir(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    simple_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    log_file = log_dir / f"{name.lower()}_{datetime.now().strftime('%Y%m%d')}.log"

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    logger.debug(f"Log file: {log_file}")

    return logger


def setup_root_logging(
    log_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Setup root logger configuration with a rotating system log.

    Args:
        log_level: Logging level
        log_dir: Directory for the log file (defaults to <state dir>/logs)

    Returns:
        Path of the log file
    """
    log_dir = _resolve_log_dir(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"system_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            ),
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )
    return log_file
