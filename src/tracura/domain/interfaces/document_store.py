"""
Tracura - Remote Document Store Protocol Interface

Protocol-based interface for the remote document store (PEP 544).

Document paths:
- customers/{customer_id}                 business type, hasDrafts
- customers/{customer_id}/projects        one field per submitted project id
- customers/{customer_id}/draft_projects  one field per draft id
"""
from typing import Any, Protocol


def customer_path(customer_id: str) -> str:
    return f"customers/{customer_id}"


def projects_path(customer_id: str) -> str:
    return f"customers/{customer_id}/projects"


def drafts_path(customer_id: str) -> str:
    return f"customers/{customer_id}/draft_projects"


class RemoteDocumentStore(Protocol):
    """
    Protocol for remote document store implementations.

    Documents are flat maps of field name to JSON-compatible value.
    """

    def get_document(self, path: str) -> dict[str, Any] | None:
        """
        Get document by path.

        Args:
            path: Document path (e.g. "customers/c1/projects")

        Returns:
            Document fields, or None if the document does not exist

        Raises:
            RemoteUnavailable: If the store cannot be reached
        """
        ...

    def set_field(self, path: str, field: str, value: Any) -> None:
        """
        Set one field of a document (the document is created if missing).

        Raises:
            RemoteUnavailable: If the write fails
        """
        ...

    def delete_field(self, path: str, field: str) -> None:
        """
        Delete one field of a document (missing fields are ignored).

        Raises:
            RemoteUnavailable: If the write fails
        """
        ...
