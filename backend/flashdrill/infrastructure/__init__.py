"""Infrastructure layer - persistence for session snapshots."""

from .snapshot_store import InMemorySnapshotStore, SqliteSnapshotStore

__all__ = [
    "InMemorySnapshotStore",
    "SqliteSnapshotStore",
]
