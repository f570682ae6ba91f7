"""
Unit tests for the form session façade.
"""

import json
from datetime import date

import pytest

from tracura.domain.exceptions import ConfigurationError, NotFoundError, SubmissionBlockedError
from tracura.domain.interfaces import projects_path
from tracura.domain.models import DraftState, FieldKind, Project
from tracura.domain.models.config import AppConfig, DraftConfig
from tracura.infrastructure.factory import create_form_session
from tracura.infrastructure.storage import InMemoryDocumentStore, InMemorySnapshotStore

CUSTOMER = "test-customer"


@pytest.fixture
def documents():
    return InMemoryDocumentStore({
        projects_path(CUSTOMER): {"p-1": {"name": "Existing Tower"}},
    })


@pytest.fixture
def snapshots():
    return InMemorySnapshotStore()


@pytest.fixture
def session(documents, snapshots):
    session = create_form_session(AppConfig.for_testing(), documents, snapshots)
    session.start()
    return session


def _make_valid(project: Project):
    project.project_name = "Tower B"
    project.planned_date = date(2025, 1, 1)
    phase = project.phases[0]
    phase.phase_name = "Foundation"
    phase.start_date = date(2025, 1, 5)
    phase.end_date = date(2025, 2, 1)
    phase.departments[0].name = "Civil"


class TestStart:
    """Test opening the form"""

    def test_fresh_form(self, session):
        assert len(session.project.phases) == 1
        assert session.expanded_phase_ids == set()
        assert session.draft_state is DraftState.CLEAN

    def test_restores_local_draft(self, documents, snapshots, session):
        with session.edit() as project:
            project.project_name = "Restored"
        session.set_phase_expanded(session.project.phases[0].id)
        session.save_draft(remote=False)

        reopened = create_form_session(AppConfig.for_testing(), documents, snapshots)
        reopened.start()

        assert reopened.project.project_name == "Restored"
        assert reopened.expanded_phase_ids == {session.project.phases[0].id}

    def test_from_template(self, documents, snapshots):
        session = create_form_session(AppConfig.for_testing(), documents, snapshots)
        session.start(template_id="renovation")
        assert session.project.project_type == "renovation"

    def test_editing_requires_project_id(self, session):
        with pytest.raises(ValueError):
            session.start(existing_project={"name": "X"})

    def test_editing_existing_project(self, session):
        session.start(existing_project={"name": "Existing Tower", "plannedDate": "01/01/2025"}, project_id="p-1")
        assert session.project.is_editing
        assert session.available_templates() == []
        assert session.name_checker.excluded_project_id == "p-1"


class TestEditing:
    """Test edit tracking and expanded sections"""

    def test_edit_marks_dirty(self, session):
        with session.edit() as project:
            project.add_phase()
        assert session.draft_state is DraftState.DIRTY

    def test_toggle_phase(self, session):
        phase_id = session.project.phases[0].id
        assert session.toggle_phase(phase_id) is True
        assert session.toggle_phase(phase_id) is False
        assert session.expanded_phase_ids == set()

    def test_expand_unknown_phase(self, session):
        with pytest.raises(NotFoundError):
            session.set_phase_expanded("missing")

    def test_total_budget_text(self, session):
        with session.edit() as project:
            department = project.phases[0].departments[0]
            department.edit_line_item(department.line_items[0].id, quantity="1200", unit_price="1000")
        assert session.total_budget_text == "₹12,00,000.00"

    async def test_name_check(self, session):
        task = session.on_project_name_changed("existing tower")
        assert await task is True
        assert session.project_name_taken is True
        assert session.draft_state is DraftState.DIRTY


class TestValidation:
    """Test inline error map"""

    def test_error_map(self, session):
        first = session.validate()
        phase_id = session.project.phases[0].id

        assert first.kind is FieldKind.PROJECT_NAME
        assert session.first_invalid_field == first
        assert session.field_errors["projectName"] == "Project name is required"
        assert session.field_errors[f"phase_{phase_id}_name"] == "Phase name is required"

    def test_errors_cleared_when_fixed(self, session):
        session.validate()
        _make_valid(session.project)
        assert session.validate() is None
        assert session.field_errors == {}


class TestDraftsAndSubmit:
    """Test drafts and submission through the session"""

    def test_save_and_load_remote_draft(self, session, snapshots):
        _make_valid(session.project)
        session.save_draft()
        draft_id = session.reconciler.current_draft_id

        session.clear_form()
        assert session.project.project_name == ""
        assert [d.draft_id for d in session.list_drafts()] == [draft_id]

        loaded = session.load_draft(draft_id)
        assert loaded.project_name == "Tower B"

    def test_clear_form_resets_name_check(self, session):
        session.name_checker.name_taken = True
        session.clear_form()
        assert session.project_name_taken is False

    def test_submit(self, session, documents, snapshots):
        _make_valid(session.project)
        session.save_draft()

        project_id = session.submit()

        projects = documents.get_document(projects_path(CUSTOMER))
        assert projects[project_id]["name"] == "Tower B"
        assert snapshots.load_snapshot(session.reconciler.snapshot_key) is None

    def test_submit_blocked_updates_errors(self, session):
        with pytest.raises(SubmissionBlockedError):
            session.submit()
        assert "projectName" in session.field_errors

    def test_submit_without_customer(self, documents, snapshots):
        config = AppConfig(drafts=DraftConfig(name_check_debounce_ms=0))
        session = create_form_session(config, documents, snapshots)
        session.start()
        with pytest.raises(ConfigurationError):
            session.submit()

    def test_local_snapshot_is_json(self, session, snapshots):
        _make_valid(session.project)
        session.save_draft(remote=False)
        data = json.loads(snapshots.load_snapshot(session.reconciler.snapshot_key))
        assert data["project"]["projectName"] == "Tower B"
