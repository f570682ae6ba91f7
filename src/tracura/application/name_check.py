"""
Tracura - Project Name Check

Remote uniqueness pre-check for the project name, debounced while the user
types. The remote result is advisory: the store enforces the real constraint
on submission.
"""
import asyncio
import logging

from tracura.application.debounce import Debouncer
from tracura.domain.exceptions import RemoteUnavailable
from tracura.domain.interfaces import RemoteDocumentStore, projects_path

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 500


class ProjectNameChecker:
    """
    Checks whether a project name is already used by the customer.

    `name_taken` holds the last known result; a failed check leaves it
    untouched.
    """

    def __init__(
        self,
        store: RemoteDocumentStore,
        customer_id: str,
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        excluded_project_id: str | None = None,
    ):
        """
        Initialize ProjectNameChecker.

        Args:
            store: Remote document store
            customer_id: Customer whose projects are searched
            debounce_ms: Quiet period before a scheduled check runs
            excluded_project_id: Project being edited (never counts as a duplicate)
        """
        self.store = store
        self.customer_id = customer_id
        self.excluded_project_id = excluded_project_id
        self.name_taken = False
        self._debouncer = Debouncer(debounce_ms / 1000)

    @property
    def checking(self) -> bool:
        return self._debouncer.pending

    def check(self, name: str) -> bool:
        """
        Query the remote projects document (blocking).

        Args:
            name: Candidate project name

        Returns:
            True if another project has the same trimmed, case-insensitive name

        Raises:
            RemoteUnavailable: If the store cannot be read
        """
        wanted = name.strip().lower()
        if not wanted:
            return False
        projects = self.store.get_document(projects_path(self.customer_id)) or {}
        for project_id, document in projects.items():
            if project_id == self.excluded_project_id or not isinstance(document, dict):
                continue
            if str(document.get("name", "")).strip().lower() == wanted:
                logger.debug(f"Project name '{name}' taken by {project_id}")
                return True
        return False

    async def check_async(self, name: str) -> bool | None:
        """
        Run check() off the event loop.

        Returns:
            The result, or None ("unknown") if the store is unavailable
        """
        try:
            return await asyncio.to_thread(self.check, name)
        except RemoteUnavailable as e:
            logger.warning(f"Project name check failed, keeping previous result: {e}")
            return None

    def _apply(self, result: bool | None) -> None:
        if result is not None:
            self.name_taken = result

    def schedule(self, name: str) -> "asyncio.Task[bool | None]":
        """
        Debounced check: replaces any pending check for an older name.

        Returns:
            Task resolving to the result (None if the check failed). A
            newer call or cancel() cancels the task.
        """
        if not name.strip():
            self.cancel()
            self.name_taken = False
        return self._debouncer.call(self.check_async, name, on_result=self._apply)

    def cancel(self) -> None:
        """Discard any pending or in-flight check without side effects."""
        self._debouncer.cancel()

    def reset(self) -> None:
        self.cancel()
        self.name_taken = False
