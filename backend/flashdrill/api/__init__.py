"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    SessionManagerDep,
    cleanup_dependencies,
    get_session_manager,
    init_dependencies,
)
from .routes import decks_router, session_router

__all__ = [
    # Routes
    "session_router",
    "decks_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_session_manager",
    # Type aliases
    "SessionManagerDep",
]
