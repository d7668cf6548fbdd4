# Ports layer - Abstract interfaces (Protocols)

from .deck_source import DeckSource
from .snapshot_store import SnapshotStore

__all__ = [
    "DeckSource",
    "SnapshotStore",
]
