"""
Tracura - Draft Persistence Reconciler

Saves and restores the in-progress project to the local snapshot store and
mirrors saved drafts into the customer's remote draft list.

State machine: CLEAN -> DIRTY (any edit) -> SAVING -> CLEAN.
Local state is single-writer; remote drafts are only enumerated, loaded and
deleted by id, never merged.
"""
import json
import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime

from tracura.domain.exceptions import (
    ConfigurationError,
    EmptyDraftError,
    NotFoundError,
    RemoteUnavailable,
    SnapshotDecodeError,
    StorageError,
)
from tracura.domain.interfaces import LocalSnapshotStore, RemoteDocumentStore, customer_path, drafts_path
from tracura.domain.models.draft import DraftSnapshot, DraftState, RemoteDraft
from tracura.domain.models.project import Project

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "create_project_draft"


def reconcile_expanded_ids(expanded_phase_ids: Iterable[str], project: Project) -> set[str]:
    """Keep only expanded ids that still belong to a live phase."""
    return set(expanded_phase_ids) & set(project.phase_ids())


class DraftReconciler:
    """
    Draft persistence for one editing session.

    Remote mirroring is active only when a document store and customer id
    are configured and remote drafts are enabled.
    """

    def __init__(
        self,
        snapshot_store: LocalSnapshotStore,
        document_store: RemoteDocumentStore | None = None,
        customer_id: str | None = None,
        *,
        snapshot_key: str = DEFAULT_SNAPSHOT_KEY,
        remote_drafts_enabled: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize DraftReconciler.

        Args:
            snapshot_store: Local autosave storage
            document_store: Remote document store (None = local only)
            customer_id: Customer owning the remote draft list
            snapshot_key: Key of the local autosave snapshot
            remote_drafts_enabled: Mirror saves to the remote draft list
            clock: Timestamp source
        """
        self.snapshot_store = snapshot_store
        self.document_store = document_store
        self.customer_id = customer_id
        self.snapshot_key = snapshot_key
        self.remote_drafts_enabled = remote_drafts_enabled
        self.clock = clock
        self.state = DraftState.CLEAN
        self.current_draft_id: str | None = None

    @property
    def has_remote(self) -> bool:
        return self.document_store is not None and bool(self.customer_id)

    def _require_remote(self) -> RemoteDocumentStore:
        if not self.has_remote:
            raise ConfigurationError("Remote drafts need a document store and a customer id", config_key="remote")
        return self.document_store

    def _transition(self, state: DraftState) -> None:
        if state is not self.state:
            logger.debug(f"Draft state {self.state.value} -> {state.value}")
            self.state = state

    # Local lifecycle

    def mark_dirty(self) -> None:
        """Record a user edit."""
        if self.state is DraftState.CLEAN:
            self._transition(DraftState.DIRTY)

    def save_draft(
        self,
        project: Project,
        expanded_phase_ids: Iterable[str] = (),
        *,
        remote: bool = True,
    ) -> DraftSnapshot:
        """
        Save the project as a draft.

        Writes the local snapshot, then (when enabled) the remote draft.

        Args:
            project: Project to save
            expanded_phase_ids: Expanded phase sections
            remote: Also write the remote draft list

        Returns:
            The saved snapshot

        Raises:
            EmptyDraftError: If the form holds no data
            StorageError: If the local snapshot cannot be written
            RemoteUnavailable: If the remote write fails (state returns to DIRTY)
        """
        if not project.has_any_data:
            raise EmptyDraftError("Nothing to save: the form is empty", field_name="project")

        self._transition(DraftState.SAVING)
        snapshot = DraftSnapshot(
            project=project,
            expanded_phase_ids=reconcile_expanded_ids(expanded_phase_ids, project),
            saved_at=self.clock(),
        )
        try:
            self.snapshot_store.save_snapshot(self.snapshot_key, json.dumps(snapshot.to_dict()))
            if remote and self.remote_drafts_enabled and self.has_remote:
                self._save_remote(snapshot)
        except (StorageError, RemoteUnavailable):
            self._transition(DraftState.DIRTY)
            raise

        self._transition(DraftState.CLEAN)
        logger.info(f"Draft saved (phases={len(project.phases)}, remote_id={self.current_draft_id})")
        return snapshot

    def _save_remote(self, snapshot: DraftSnapshot) -> None:
        store = self._require_remote()
        path = drafts_path(self.customer_id)
        draft_id = self.current_draft_id or uuid.uuid4().hex
        created_at = snapshot.saved_at

        if self.current_draft_id is not None:
            existing = (store.get_document(path) or {}).get(draft_id)
            if existing is not None:
                try:
                    created_at = RemoteDraft.from_dict(existing, draft_id).created_at
                except SnapshotDecodeError as e:
                    logger.warning(f"Existing draft {draft_id} unreadable, resetting createdAt: {e}")

        draft = RemoteDraft(
            draft_id=draft_id,
            project=snapshot.project,
            expanded_phase_ids=snapshot.expanded_phase_ids,
            created_at=created_at,
            updated_at=snapshot.saved_at,
        )
        store.set_field(path, draft_id, draft.to_dict())
        customer = customer_path(self.customer_id)
        store.set_field(customer, "hasDrafts", True)
        store.set_field(customer, "lastDraftUpdatedAt", snapshot.saved_at.isoformat())
        self.current_draft_id = draft_id
        logger.info(f"Remote draft saved: {draft_id}")

    def restore(self) -> DraftSnapshot | None:
        """
        Restore the local snapshot (cold start).

        Undecodable snapshots are logged and ignored. Expanded ids are
        intersected with the restored phases.

        Returns:
            Restored snapshot, or None if there is nothing usable

        Raises:
            StorageError: If the snapshot store cannot be read
        """
        blob = self.snapshot_store.load_snapshot(self.snapshot_key)
        if blob is None:
            return None
        try:
            try:
                data = json.loads(blob)
            except ValueError as e:
                raise SnapshotDecodeError(
                    f"Snapshot is not valid JSON: {e}", entity_type="snapshot", entity_id=self.snapshot_key
                ) from e
            if not isinstance(data, dict):
                raise SnapshotDecodeError("Snapshot is not an object", entity_type="snapshot", entity_id=self.snapshot_key)
            snapshot = DraftSnapshot.from_dict(data, self.snapshot_key)
        except SnapshotDecodeError as e:
            logger.warning(f"Ignoring unreadable local draft: {e}")
            return None

        snapshot.expanded_phase_ids = reconcile_expanded_ids(snapshot.expanded_phase_ids, snapshot.project)
        self._transition(DraftState.CLEAN)
        logger.info(f"Local draft restored (saved_at={snapshot.saved_at.isoformat()})")
        return snapshot

    def clear_form(self) -> Project:
        """
        Discard the local snapshot and start over.

        Returns:
            Fresh empty project
        """
        self.snapshot_store.clear_snapshot(self.snapshot_key)
        self.current_draft_id = None
        self._transition(DraftState.CLEAN)
        logger.info("Form cleared")
        return Project()

    # Remote draft list

    def list_remote_drafts(self) -> list[RemoteDraft]:
        """
        List the customer's remote drafts, newest first.

        Undecodable entries are skipped.

        Raises:
            ConfigurationError: If no remote store is configured
            RemoteUnavailable: If the list cannot be read
        """
        store = self._require_remote()
        entries = store.get_document(drafts_path(self.customer_id)) or {}
        drafts = []
        for draft_id, entry in entries.items():
            try:
                drafts.append(RemoteDraft.from_dict(entry, draft_id))
            except SnapshotDecodeError as e:
                logger.warning(f"Skipping unreadable draft {draft_id}: {e}")
        drafts.sort(key=lambda d: d.updated_at, reverse=True)
        return drafts

    def load_remote_draft(self, draft_id: str) -> RemoteDraft:
        """
        Load a remote draft as the current draft.

        The local snapshot is cleared; later saves update this draft.

        Raises:
            NotFoundError: If the draft does not exist
            SnapshotDecodeError: If the draft cannot be decoded
            RemoteUnavailable: If the list cannot be read
        """
        store = self._require_remote()
        entry = (store.get_document(drafts_path(self.customer_id)) or {}).get(draft_id)
        if entry is None:
            raise NotFoundError(f"Draft not found: {draft_id}", entity_type="draft", entity_id=draft_id)
        draft = RemoteDraft.from_dict(entry, draft_id)
        draft.expanded_phase_ids = reconcile_expanded_ids(draft.expanded_phase_ids, draft.project)

        self.snapshot_store.clear_snapshot(self.snapshot_key)
        self.current_draft_id = draft_id
        self._transition(DraftState.CLEAN)
        logger.info(f"Remote draft loaded: {draft_id}")
        return draft

    def _refresh_has_drafts(self, store: RemoteDocumentStore) -> None:
        remaining = store.get_document(drafts_path(self.customer_id)) or {}
        store.set_field(customer_path(self.customer_id), "hasDrafts", bool(remaining))

    def delete_remote_draft(self, draft_id: str) -> None:
        """
        Delete one remote draft.

        Raises:
            RemoteUnavailable: If the delete fails
        """
        store = self._require_remote()
        store.delete_field(drafts_path(self.customer_id), draft_id)
        if self.current_draft_id == draft_id:
            self.current_draft_id = None
        self._refresh_has_drafts(store)
        logger.info(f"Remote draft deleted: {draft_id}")

    def delete_all_remote_drafts(self) -> int:
        """
        Delete every remote draft of the customer.

        Returns:
            Number of drafts deleted

        Raises:
            RemoteUnavailable: If the list cannot be read or a delete fails
        """
        store = self._require_remote()
        path = drafts_path(self.customer_id)
        draft_ids = list((store.get_document(path) or {}).keys())
        for draft_id in draft_ids:
            store.delete_field(path, draft_id)
        store.set_field(customer_path(self.customer_id), "hasDrafts", False)
        self.current_draft_id = None
        logger.info(f"Deleted {len(draft_ids)} remote drafts")
        return len(draft_ids)

    def discard_after_submit(self) -> None:
        """
        Drop the local snapshot and the current remote draft after a submit.

        A remote failure here is logged and ignored: the project is already
        submitted.
        """
        self.snapshot_store.clear_snapshot(self.snapshot_key)
        if self.current_draft_id is not None and self.has_remote:
            try:
                self.delete_remote_draft(self.current_draft_id)
            except RemoteUnavailable as e:
                logger.warning(f"Submitted project's draft {self.current_draft_id} not deleted: {e}")
        self.current_draft_id = None
        self._transition(DraftState.CLEAN)
