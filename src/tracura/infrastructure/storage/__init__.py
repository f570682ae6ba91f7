"""Tracura - Storage adapters (remote documents, local snapshots)."""

from .http_document_store import HttpDocumentStore
from .memory_document_store import InMemoryDocumentStore
from .file_snapshot_store import FileSnapshotStore
from .memory_snapshot_store import InMemorySnapshotStore

__all__ = [
    "HttpDocumentStore",
    "InMemoryDocumentStore",
    "FileSnapshotStore",
    "InMemorySnapshotStore",
]
