"""Tests for the logging setup helpers."""

import logging
import logging.handlers

from bot_logging import setup_logging, setup_root_logging


def test_setup_logging_writes_rotating_file(tmp_path):
    logger = setup_logging("test_component", log_dir=tmp_path, console_output=False)

    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.handlers.RotatingFileHandler)

    logger.info("reminder fired")
    logger.handlers[0].flush()

    log_files = list(tmp_path.glob("test_component_*.log"))
    assert len(log_files) == 1
    assert "reminder fired" in log_files[0].read_text()


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    setup_logging("test_repeat", log_dir=tmp_path, console_output=True)
    logger = setup_logging("test_repeat", log_dir=tmp_path, console_output=True)
    assert len(logger.handlers) == 2


def test_setup_root_logging_returns_log_file(tmp_path):
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    try:
        log_file = setup_root_logging("DEBUG", tmp_path / "logs")

        assert log_file.parent == tmp_path / "logs"
        assert log_file.name.startswith("system_")
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
