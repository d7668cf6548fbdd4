"""Port interface for persisting the active session snapshot."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SnapshotStore(Protocol):
    """Port for the single persisted session snapshot.

    The snapshot lets an in-progress session survive a reload. It is
    overwritten after every rating and removed when the session completes.
    """

    async def save(self, payload: dict) -> None:
        """Store the snapshot, replacing any previous one."""
        ...

    async def load(self) -> dict | None:
        """Get the stored snapshot.

        Returns:
            Snapshot payload, or None if nothing is stored
        """
        ...

    async def clear(self) -> None:
        """Remove the stored snapshot (no-op if none)."""
        ...
