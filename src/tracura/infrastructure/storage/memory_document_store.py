"""
Tracura - In-Memory Document Store

RemoteDocumentStore implementation backed by a dict. Values are deep-copied
on the way in and out, like a real remote store.
"""
import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Implements RemoteDocumentStore protocol (local development, tests)."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None):
        self._documents: dict[str, dict[str, Any]] = copy.deepcopy(documents) if documents else {}

    def get_document(self, path: str) -> dict[str, Any] | None:
        document = self._documents.get(path)
        return copy.deepcopy(document) if document is not None else None

    def set_field(self, path: str, field: str, value: Any) -> None:
        self._documents.setdefault(path, {})[field] = copy.deepcopy(value)
        logger.debug(f"Set {path}.{field}")

    def delete_field(self, path: str, field: str) -> None:
        document = self._documents.get(path)
        if document is not None:
            document.pop(field, None)
            logger.debug(f"Deleted {path}.{field}")
