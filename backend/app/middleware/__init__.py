"""Middleware for the Solaria Admin API."""

from app.middleware.auth import get_current_admin

__all__ = [
    "get_current_admin",
]
