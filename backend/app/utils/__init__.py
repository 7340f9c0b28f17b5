"""Utilities for the Solaria Admin API."""

from app.utils.logger import bind_context, configure_logging, get_logger

__all__ = [
    "bind_context",
    "configure_logging",
    "get_logger",
]
