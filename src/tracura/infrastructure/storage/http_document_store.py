"""
Tracura - HTTP Document Store

Implementation of the RemoteDocumentStore protocol over a JSON REST API:

    GET    {url}/documents/{path}                 -> document fields (404 = missing)
    PUT    {url}/documents/{path}/fields/{field}  body {"value": ...}
    DELETE {url}/documents/{path}/fields/{field}
"""
import logging
from typing import Any
from urllib.parse import quote

import requests

from tracura.domain.exceptions import RemoteUnavailable
from tracura.domain.models.config import RemoteStoreConfig

logger = logging.getLogger(__name__)


class HttpDocumentStore:
    """
    Remote document store client.

    Implements RemoteDocumentStore protocol. Every transport, HTTP or
    decoding failure surfaces as RemoteUnavailable.
    """

    def __init__(self, config: RemoteStoreConfig, session: requests.Session | None = None):
        """
        Initialize HttpDocumentStore.

        Args:
            config: Remote store configuration
            session: Optional preconfigured session (tests, connection reuse)
        """
        self.config = config
        self.base_url = config.url.rstrip("/")
        self.session = session or requests.Session()
        if config.api_key:
            self.session.headers["Authorization"] = f"Bearer {config.api_key}"
        logger.info(f"HttpDocumentStore initialized: {self.base_url}")

    def _document_url(self, path: str) -> str:
        return f"{self.base_url}/documents/{quote(path.strip('/'))}"

    def _field_url(self, path: str, field: str) -> str:
        return f"{self._document_url(path)}/fields/{quote(field, safe='')}"

    def get_document(self, path: str) -> dict[str, Any] | None:
        """
        Fetch a document.

        Returns:
            Document fields, or None on 404

        Raises:
            RemoteUnavailable: On network/HTTP errors or a non-object body
        """
        try:
            response = self.session.get(self._document_url(path), timeout=self.config.timeout_seconds)
            if response.status_code == 404:
                logger.debug(f"Document not found: {path}")
                return None
            response.raise_for_status()
            document = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch document {path}: {e}", exc_info=True)
            raise RemoteUnavailable(f"Failed to fetch document: {e}", path=path) from e
        except ValueError as e:
            logger.error(f"Invalid JSON for document {path}: {e}", exc_info=True)
            raise RemoteUnavailable(f"Invalid document body: {e}", path=path) from e

        if not isinstance(document, dict):
            raise RemoteUnavailable(f"Document is not an object: {type(document).__name__}", path=path)
        return document

    def set_field(self, path: str, field: str, value: Any) -> None:
        """
        Write one document field.

        Raises:
            RemoteUnavailable: If the write fails
        """
        try:
            response = self.session.put(
                self._field_url(path, field),
                json={"value": value},
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to set {path}.{field}: {e}", exc_info=True)
            raise RemoteUnavailable(f"Failed to write field: {e}", path=path, field=field) from e
        logger.debug(f"Set {path}.{field}")

    def delete_field(self, path: str, field: str) -> None:
        """
        Delete one document field (404 is treated as already deleted).

        Raises:
            RemoteUnavailable: If the delete fails
        """
        try:
            response = self.session.delete(self._field_url(path, field), timeout=self.config.timeout_seconds)
            if response.status_code != 404:
                response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to delete {path}.{field}: {e}", exc_info=True)
            raise RemoteUnavailable(f"Failed to delete field: {e}", path=path, field=field) from e
        logger.debug(f"Deleted {path}.{field}")

    def health_check(self) -> bool:
        """Check if the document store is reachable"""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=3)
            return response.ok
        except requests.exceptions.RequestException:
            return False
