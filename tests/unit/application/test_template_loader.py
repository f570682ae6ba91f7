"""
Unit tests for template selection.
"""

from datetime import date
from unittest.mock import Mock

import pytest

from tracura.application.template_loader import TemplateLoader
from tracura.domain.exceptions import NotFoundError, RemoteUnavailable
from tracura.domain.interfaces import customer_path
from tracura.domain.models import AuthoringContext, Project
from tracura.infrastructure.storage import InMemoryDocumentStore
from tracura.infrastructure.templates import BuiltinTemplateCatalog

CUSTOMER = "cust-1"


def _loader(business_type=None):
    documents = {}
    if business_type is not None:
        documents[customer_path(CUSTOMER)] = {"businessType": business_type}
    return TemplateLoader(BuiltinTemplateCatalog(), InMemoryDocumentStore(documents), CUSTOMER)


class TestAvailableTemplates:
    """Test business-type filtering"""

    def test_construction(self):
        names = [t.name for t in _loader("Construction").available_templates(Project())]
        assert names == ["Commercial Office", "Renovation", "Residential Building", "Road Infrastructure"]

    def test_interior_design(self):
        names = [t.name for t in _loader("Interior Design").available_templates(Project())]
        assert names == ["Commercial Office", "Renovation"]

    def test_known_type_without_templates(self):
        assert _loader("Media").available_templates(Project()) == []

    def test_unknown_type_offers_all(self):
        assert len(_loader("Bakery").available_templates(Project())) == 4

    def test_missing_customer_document_offers_all(self):
        assert len(_loader().available_templates(Project())) == 4

    def test_remote_failure_offers_all(self):
        store = Mock()
        store.get_document.side_effect = RemoteUnavailable("down", path="customers")
        loader = TemplateLoader(BuiltinTemplateCatalog(), store, CUSTOMER)
        assert loader.fetch_business_type() is None
        assert len(loader.available_templates(Project())) == 4

    def test_editing_offers_none(self):
        store = Mock()
        loader = TemplateLoader(BuiltinTemplateCatalog(), store, CUSTOMER)
        project = Project(context=AuthoringContext.EDITING, editing_project_id="p-1")
        assert loader.available_templates(project) == []
        store.get_document.assert_not_called()

    def test_summary_counts(self):
        summary = next(t for t in _loader().available_templates(Project()) if t.id == "residential_building")
        assert summary.phase_count == 2
        assert summary.department_count == 5


class TestLoad:
    """Test seeding a project from a template"""

    def test_load(self):
        project = Project(project_name="Old name", client="Acme", planned_date=date(2025, 1, 1))
        template = _loader().load(project, "residential_building")

        assert template.name == "Residential Building"
        assert project.project_name == ""
        assert project.client == ""
        assert project.project_type == "residential_building"
        assert [p.phase_name for p in project.phases] == ["Foundation", "Superstructure"]
        assert [p.phase_number for p in project.phases] == [1, 2]

    def test_unknown_template(self):
        project = Project(project_name="Keep")
        with pytest.raises(NotFoundError):
            _loader().load(project, "nope")
        assert project.project_name == "Keep"
