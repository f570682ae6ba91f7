"""Tracura - Domain Interfaces (Protocols)."""

from .document_store import RemoteDocumentStore, customer_path, drafts_path, projects_path
from .snapshot_store import LocalSnapshotStore
from .template_catalog import TemplateCatalog
from .formatter import CurrencyFormatter

__all__ = [
    # Remote store
    "RemoteDocumentStore",
    "customer_path",
    "projects_path",
    "drafts_path",
    # Local store
    "LocalSnapshotStore",
    # Templates
    "TemplateCatalog",
    # Formatting
    "CurrencyFormatter",
]
