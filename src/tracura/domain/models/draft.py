"""
Tracura - Draft Domain Models

Serialized in-progress project plus UI state, stored locally and (optionally)
in the customer's remote draft list.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..exceptions import ParseError, SnapshotDecodeError
from .project import Project


class DraftState(str, Enum):
    """Draft lifecycle of an editing session."""

    CLEAN = "clean"  # No unsaved local changes
    DIRTY = "dirty"  # User input not yet drafted
    SAVING = "saving"


def _decode(kind: str, key: str | None, data: Any, build):
    try:
        return build(data)
    except (KeyError, TypeError, ValueError, AttributeError, ArithmeticError, ParseError) as e:
        raise SnapshotDecodeError(
            f"Cannot decode {kind}: {e}", entity_type=kind, entity_id=key
        ) from e


@dataclass
class DraftSnapshot:
    """
    Local autosave blob.

    Layout: {"project": {...}, "expandedPhaseIds": [...], "savedAt": iso}
    """

    project: Project
    expanded_phase_ids: set[str] = field(default_factory=set)
    saved_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project.to_dict(),
            "expandedPhaseIds": sorted(self.expanded_phase_ids),
            "savedAt": self.saved_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], key: str | None = None) -> "DraftSnapshot":
        """
        Decode a stored snapshot.

        Raises:
            SnapshotDecodeError: If the blob does not have the snapshot layout
        """
        return _decode("snapshot", key, data, lambda d: cls(
            project=Project.from_dict(d["project"]),
            expanded_phase_ids=set(d.get("expandedPhaseIds") or []),
            saved_at=datetime.fromisoformat(d["savedAt"]),
        ))


@dataclass
class RemoteDraft:
    """Draft stored under the customer's draft list (one field per draft id)."""

    draft_id: str
    project: Project
    expanded_phase_ids: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def title(self) -> str:
        return self.project.project_name.strip() or "Untitled Draft"

    def to_dict(self) -> dict[str, Any]:
        return {
            "draftId": self.draft_id,
            "project": self.project.to_dict(),
            "expandedPhaseIds": sorted(self.expanded_phase_ids),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], draft_id: str | None = None) -> "RemoteDraft":
        """
        Decode a remote draft entry.

        Raises:
            SnapshotDecodeError: If the entry is malformed
        """
        return _decode("draft", draft_id, data, lambda d: cls(
            draft_id=d.get("draftId") or draft_id,
            project=Project.from_dict(d["project"]),
            expanded_phase_ids=set(d.get("expandedPhaseIds") or []),
            created_at=datetime.fromisoformat(d["createdAt"]),
            updated_at=datetime.fromisoformat(d["updatedAt"]),
        ))
