"""API routes module."""

from .decks import router as decks_router
from .session import router as session_router

__all__ = ["session_router", "decks_router"]
