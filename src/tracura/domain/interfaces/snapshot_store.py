"""
Tracura - Local Snapshot Store Protocol Interface

Autosave storage for in-progress drafts (PEP 544).
"""
from typing import Protocol


class LocalSnapshotStore(Protocol):
    """Protocol for local key -> blob snapshot storage."""

    def save_snapshot(self, key: str, blob: str) -> None:
        """
        Store a snapshot, replacing any previous one under the key.

        Raises:
            StorageError: If the snapshot cannot be written
        """
        ...

    def load_snapshot(self, key: str) -> str | None:
        """
        Load a snapshot.

        Returns:
            Stored blob, or None if nothing is stored under the key

        Raises:
            StorageError: If the snapshot exists but cannot be read
        """
        ...

    def clear_snapshot(self, key: str) -> None:
        """Remove a snapshot (no-op when absent)."""
        ...
