"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

import logging
import random
from pathlib import Path

from flashdrill.adapters.http_deck import HttpDeckSource
from flashdrill.adapters.json_file_deck import JsonFileDeckSource
from flashdrill.config import (
    get_deck_http_timeout,
    get_deck_source,
    get_reinsertion_policy,
    get_size_presets,
    get_snapshot_backend,
    get_snapshot_db_path,
)
from flashdrill.domain.services.session_manager import SessionManager
from flashdrill.infrastructure.snapshot_store import InMemorySnapshotStore, SqliteSnapshotStore
from flashdrill.ports.deck_source import DeckSource
from flashdrill.ports.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def create_deck_source(location: str | None = None) -> DeckSource:
    """Create the deck source for a path or URL.

    Args:
        location: File path or http(s) URL; None reads FLASHDRILL_DECK_SOURCE
            and falls back to the bundled sample deck

    Returns:
        HttpDeckSource for URLs, JsonFileDeckSource otherwise
    """
    location = location if location is not None else get_deck_source()
    if location and location.startswith(("http://", "https://")):
        return HttpDeckSource(location, timeout=get_deck_http_timeout())
    return JsonFileDeckSource(location)


def create_snapshot_store() -> SnapshotStore:
    """Create the snapshot store selected by SNAPSHOT_BACKEND.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = get_snapshot_backend()
    if backend == "memory":
        logger.info("Using in-memory snapshot store")
        return InMemorySnapshotStore()
    if backend == "sqlite":
        db_path = get_snapshot_db_path()
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return SqliteSnapshotStore(db_path)
    raise ValueError(f"Invalid SNAPSHOT_BACKEND: '{backend}'. Valid options: 'sqlite', 'memory'")


def create_session_manager(
    deck_source: DeckSource | None = None,
    snapshot_store: SnapshotStore | None = None,
    rng: random.Random | None = None,
) -> SessionManager:
    """Create SessionManager with configured adapters.

    Returns:
        SessionManager (deck not yet loaded)
    """
    return SessionManager(
        deck_source=deck_source or create_deck_source(),
        snapshot_store=snapshot_store or create_snapshot_store(),
        size_presets=get_size_presets(),
        policy=get_reinsertion_policy(),
        rng=rng,
    )
