"""FastAPI dependency injection module.

Provides the singleton session manager for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from typing import Annotated

from fastapi import Depends

from flashdrill.composition import create_session_manager
from flashdrill.domain.services.session_manager import SessionManager

logger = logging.getLogger(__name__)


# Singleton stored at module level
_session_manager: SessionManager | None = None


async def init_dependencies(session_manager: SessionManager | None = None) -> None:
    """Initialize singleton dependencies.

    Called during FastAPI lifespan startup. Loads the deck and resumes
    a session left in the snapshot store.

    Args:
        session_manager: Prebuilt manager (tests); built from config if None
    """
    global _session_manager

    _session_manager = session_manager or create_session_manager()

    card_count = await _session_manager.load_deck()
    if _session_manager.deck_error is None:
        logger.info(f"Deck ready: {card_count} cards")

    if await _session_manager.restore():
        logger.info("Resumed session from snapshot")


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    The snapshot already holds any in-progress session, so nothing is
    flushed here; the singleton is dropped.
    """
    global _session_manager
    _session_manager = None


def get_session_manager() -> SessionManager:
    """Dependency: Get SessionManager instance."""
    if _session_manager is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _session_manager


# Type aliases for dependency injection
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
