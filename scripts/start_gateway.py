#!/usr/bin/env python3
"""
Reminder Bot Gateway - WebSocket chat server.

Usage:
    python scripts/start_gateway.py

Environment Variables:
    REMINDER_BOT_HOST              - Host to bind to (default: 127.0.0.1)
    REMINDER_BOT_PORT              - Port to listen on (default: 8765)
    REMINDER_BOT_CONFIRM_DURATIONS - Ask before remembering durations (default: true)
    REMINDER_BOT_STATE_DIR         - State directory (default: ~/.local/state/reminder_bot)
    LOG_DIR                        - Log directory (default: <state dir>/logs)
    LOG_LEVEL                      - Logging level (default: INFO)

Example session (with websocat):
    websocat ws://127.0.0.1:8765/ws
    > remind me about my homework
    < How long does your homework take?
    > 20 minutes
    < Ok, I will remind you about your homework in 1200 seconds.
"""

import logging
import os
import socket
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def check_port_available(host: str, port: int) -> bool:
    """Return True if the gateway could bind host:port right now.

    The probe socket sets SO_REUSEADDR like uvicorn's listener does, so a port
    left in TIME_WAIT counts as free while a live listener does not.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def main() -> int:
    """Start the Reminder Bot Gateway server.

    Returns:
        Process exit code; 1 when the configured port is already taken
    """
    import uvicorn

    from bot_logging import setup_root_logging
    from reminder_bot.server import app, get_config

    config = get_config()
    log_file = setup_root_logging(config.log_level, config.log_dir)
    logger = logging.getLogger("reminder_bot")

    host = config.host
    port = config.port

    if not check_port_available(host, port):
        logger.error(f"Port {port} on {host} is already in use; set REMINDER_BOT_PORT to a free port")
        logger.error(f"Find the listener with: lsof -iTCP:{port} -sTCP:LISTEN -n -P")
        return 1

    logger.info("=" * 60)
    logger.info("Reminder Bot Gateway")
    logger.info("=" * 60)
    logger.info(f"WebSocket:  ws://{host}:{port}/ws")
    logger.info(f"Health:     http://{host}:{port}/health")
    logger.info(f"Log file:   {log_file}")
    logger.info(f"Confirm durations: {config.confirm_durations}")
    logger.info("=" * 60)

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
