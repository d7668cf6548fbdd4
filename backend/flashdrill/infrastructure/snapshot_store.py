"""SQLite-based store for the active session snapshot.

Keeps a single record under a well-known key so an in-progress session
survives a reload. Not meant as durable history across sessions.
Each call opens its own connection in a worker thread; a lock serialises
writes from concurrent requests.
"""

import asyncio
import json
import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from flashdrill.domain.constants import SNAPSHOT_KEY

logger = logging.getLogger(__name__)


class SqliteSnapshotStore:
    """SQLite-based SnapshotStore.

    Thread-safe async operations using asyncio.Lock and to_thread.
    """

    def __init__(self, db_path: str = "snapshot.db", key: str = SNAPSHOT_KEY):
        """Initialize snapshot store.

        Args:
            db_path: Path to SQLite database file
            key: Key the snapshot is stored under

        Database tables are created synchronously on construction.
        """
        self._db_path = Path(db_path)
        self._key = key
        self._lock = asyncio.Lock()
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        """Create SQLite connection."""
        conn = sqlite3.connect(self._db_path)
        conn.execute("PRAGMA synchronous=NORMAL")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    key TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )

    async def save(self, payload: dict) -> None:
        """Store the snapshot, replacing any previous one."""
        async with self._lock:
            await asyncio.to_thread(self._save_sync, json.dumps(payload))

    def _save_sync(self, document: str) -> None:
        """Synchronous save implementation."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO snapshots (key, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (self._key, document, datetime.now(UTC).isoformat()),
            )

    async def load(self) -> dict | None:
        """Get the stored snapshot, or None."""
        async with self._lock:
            document = await asyncio.to_thread(self._load_sync)
        if document is None:
            return None
        try:
            return json.loads(document)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable snapshot under {self._key}: {e}")
            return None

    def _load_sync(self) -> str | None:
        """Synchronous load implementation."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT payload FROM snapshots WHERE key = ?", (self._key,)
            ).fetchone()
            return row[0] if row else None

    async def clear(self) -> None:
        """Remove the stored snapshot."""
        async with self._lock:
            await asyncio.to_thread(self._clear_sync)

    def _clear_sync(self) -> None:
        """Synchronous clear implementation."""
        with self._connect() as conn:
            conn.execute("DELETE FROM snapshots WHERE key = ?", (self._key,))


class InMemorySnapshotStore:
    """SnapshotStore kept in process memory (lost on restart)."""

    def __init__(self) -> None:
        self._payload: dict | None = None

    async def save(self, payload: dict) -> None:
        # Copies in and out keep callers from sharing mutable state with the store
        self._payload = json.loads(json.dumps(payload))

    async def load(self) -> dict | None:
        if self._payload is None:
            return None
        return json.loads(json.dumps(self._payload))

    async def clear(self) -> None:
        self._payload = None
