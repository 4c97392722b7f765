"""Data module - canned assistant copy and quick-reply suggestions."""

from .prompts import (
    ACTION_MESSAGES,
    CLEARED_SUGGESTIONS,
    QUICK_START_QUERIES,
    RETRY_SUGGESTIONS,
    WELCOME_SUGGESTIONS,
)

__all__ = [
    "ACTION_MESSAGES",
    "CLEARED_SUGGESTIONS",
    "QUICK_START_QUERIES",
    "RETRY_SUGGESTIONS",
    "WELCOME_SUGGESTIONS",
]
