"""
Tracura - Project Form Session

One editing session of the project-creation form: owns the project tree and
the expanded-section state, and wires drafts, templates, the name check,
validation and submission together.
"""
import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from tracura.application.draft_reconciler import DraftReconciler, reconcile_expanded_ids
from tracura.application.name_check import ProjectNameChecker
from tracura.application.submission import ProjectSubmitter
from tracura.application.template_loader import TemplateLoader
from tracura.domain.exceptions import ConfigurationError
from tracura.domain.interfaces import CurrencyFormatter
from tracura.domain.models.draft import DraftSnapshot, DraftState, RemoteDraft
from tracura.domain.models.field_ref import FieldRef
from tracura.domain.models.project import Project
from tracura.domain.models.template import TemplateSummary
from tracura.domain.validation import ProjectValidator

logger = logging.getLogger(__name__)


class ProjectFormSession:
    """
    Editing session façade.

    Mutate the tree inside `edit()` so the draft state follows the edits:

        with session.edit() as project:
            project.add_phase()
    """

    def __init__(
        self,
        *,
        reconciler: DraftReconciler,
        template_loader: TemplateLoader,
        validator: ProjectValidator,
        formatter: CurrencyFormatter,
        name_checker: ProjectNameChecker | None = None,
        submitter: ProjectSubmitter | None = None,
    ):
        self.reconciler = reconciler
        self.template_loader = template_loader
        self.validator = validator
        self.formatter = formatter
        self.name_checker = name_checker
        self.submitter = submitter

        self.project = Project()
        self.expanded_phase_ids: set[str] = set()
        self.first_invalid_field: FieldRef | None = None
        self.field_errors: dict[str, str] = {}

    # Start

    def start(
        self,
        *,
        existing_project: dict[str, Any] | None = None,
        project_id: str | None = None,
        template_id: str | None = None,
    ) -> Project:
        """
        Open the form.

        Args:
            existing_project: Submitted project document to edit
            project_id: Id of the project being edited
            template_id: Template to seed a new project from

        Without either, the last local draft is restored (if any).

        Returns:
            The session's project
        """
        if existing_project is not None:
            if not project_id:
                raise ValueError("project_id is required when editing an existing project")
            self.project = Project()
            self.project.load_for_editing(existing_project, project_id)
            if self.name_checker is not None:
                self.name_checker.excluded_project_id = project_id
            self.expanded_phase_ids = set()
        elif template_id is not None:
            self.project = Project()
            self.template_loader.load(self.project, template_id)
            self.expanded_phase_ids = set()
        else:
            snapshot = self.reconciler.restore()
            if snapshot is not None:
                self.project = snapshot.project
                self.expanded_phase_ids = set(snapshot.expanded_phase_ids)
            else:
                self.project = Project()
                self.expanded_phase_ids = set()
        self._reset_errors()
        logger.info(f"Form session started (context={self.project.context.value}, phases={len(self.project.phases)})")
        return self.project

    # Editing

    @contextmanager
    def edit(self) -> Iterator[Project]:
        """Yield the project for mutation; marks the draft dirty on success."""
        yield self.project
        self.reconciler.mark_dirty()

    @property
    def draft_state(self) -> DraftState:
        return self.reconciler.state

    def set_phase_expanded(self, phase_id: str, expanded: bool = True) -> None:
        self.project.phase(phase_id)
        if expanded:
            self.expanded_phase_ids.add(phase_id)
        else:
            self.expanded_phase_ids.discard(phase_id)

    def toggle_phase(self, phase_id: str) -> bool:
        """Toggle a phase section; returns the new expanded state."""
        expanded = phase_id not in self.expanded_phase_ids
        self.set_phase_expanded(phase_id, expanded)
        return expanded

    def on_project_name_changed(self, name: str) -> "asyncio.Task[bool | None] | None":
        """
        Update the project name and schedule the debounced uniqueness check.

        Returns:
            The scheduled check, or None without a name checker
        """
        with self.edit() as project:
            project.project_name = name
        if self.name_checker is None:
            return None
        return self.name_checker.schedule(name)

    @property
    def project_name_taken(self) -> bool:
        return self.name_checker.name_taken if self.name_checker is not None else False

    # Templates

    def available_templates(self) -> list[TemplateSummary]:
        return self.template_loader.available_templates(self.project)

    def apply_template(self, template_id: str) -> None:
        with self.edit() as project:
            self.template_loader.load(project, template_id)
        self.expanded_phase_ids = set()
        self._reset_errors()

    # Validation

    def _reset_errors(self) -> None:
        self.first_invalid_field = None
        self.field_errors = {}

    def validate(self) -> FieldRef | None:
        """
        Validate the whole tree.

        Rebuilds the inline error map from scratch (stale entries, such as
        earlier team errors, disappear) and remembers the first invalid field.

        Returns:
            First invalid field, or None
        """
        refs = self.validator.all_errors(self.project, project_name_taken=self.project_name_taken)
        self.field_errors = {}
        for ref in refs:
            self.field_errors.setdefault(ref.key, ref.message)
        self.first_invalid_field = refs[0] if refs else None
        return self.first_invalid_field

    @property
    def total_budget_text(self) -> str:
        return self.formatter.format(self.project.total_budget)

    # Drafts

    def save_draft(self, *, remote: bool = True) -> DraftSnapshot:
        snapshot = self.reconciler.save_draft(self.project, self.expanded_phase_ids, remote=remote)
        self.expanded_phase_ids = set(snapshot.expanded_phase_ids)
        return snapshot

    def list_drafts(self) -> list[RemoteDraft]:
        return self.reconciler.list_remote_drafts()

    def load_draft(self, draft_id: str) -> Project:
        """Replace the form with a remote draft."""
        draft = self.reconciler.load_remote_draft(draft_id)
        self.project = draft.project
        self.expanded_phase_ids = reconcile_expanded_ids(draft.expanded_phase_ids, self.project)
        self._reset_errors()
        return self.project

    def clear_form(self) -> Project:
        self.project = self.reconciler.clear_form()
        self.expanded_phase_ids = set()
        self._reset_errors()
        if self.name_checker is not None:
            self.name_checker.reset()
        return self.project

    # Submission

    def submit(self) -> str:
        """
        Validate and submit the project.

        Raises:
            ConfigurationError: If the session has no submitter
            SubmissionBlockedError: If validation fails (the error map is updated)
            RemoteUnavailable: If the store write fails
        """
        if self.submitter is None:
            raise ConfigurationError("Submission needs a remote document store and customer id", config_key="remote")
        self.validate()
        return self.submitter.submit(self.project, project_name_taken=self.project_name_taken)

    def close(self) -> None:
        """Discard any in-flight name check."""
        if self.name_checker is not None:
            self.name_checker.cancel()
