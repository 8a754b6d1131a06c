"""Reminder Bot - pattern-matched reminder dialogs over a WebSocket."""

__version__ = "0.1.0"
