"""Logging package."""
from .setup import setup_logging, setup_root_logging

__all__ = ["setup_logging", "setup_root_logging"]
