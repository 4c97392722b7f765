"""API module - FastAPI route handlers."""

from . import assistant_routes

__all__ = ["assistant_routes"]
