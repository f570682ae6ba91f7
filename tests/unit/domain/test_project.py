"""
Unit tests for the project aggregator.
"""

import copy
from datetime import date, timedelta
from decimal import Decimal

import pytest

from tracura.domain.exceptions import InvariantViolation, NotFoundError, ParseError
from tracura.domain.models import AuthoringContext, ContractorMode, Department, Phase, Project
from tracura.infrastructure.templates.builtin_catalog import BuiltinTemplateCatalog

PLANNED = date(2025, 1, 1)


class TestProjectPhases:
    """Test phase management"""

    def test_new_project_has_one_phase(self):
        project = Project(planned_date=PLANNED)
        assert len(project.phases) == 1
        assert project.phases[0].phase_number == 1
        assert project.phases[0].start_date == PLANNED
        assert project.phases[0].end_date == PLANNED + timedelta(days=30)

    def test_add_phase_follows_previous(self):
        project = Project(planned_date=PLANNED)
        new_id = project.add_phase()
        added = project.phase(new_id)
        assert [p.phase_number for p in project.phases] == [1, 2]
        assert added.start_date == project.phases[0].end_date + timedelta(days=1)
        assert added.end_date == added.start_date + timedelta(days=31)

    def test_add_phase_never_before_planned_date(self):
        project = Project(
            planned_date=date(2025, 3, 1),
            phases=[Phase(start_date=date(2025, 1, 1), end_date=date(2025, 1, 10))],
        )
        added = project.phase(project.add_phase())
        assert added.start_date == date(2025, 3, 1)

    def test_remove_only_phase_rejected(self):
        project = Project(planned_date=PLANNED)
        before = copy.deepcopy(project)
        with pytest.raises(InvariantViolation):
            project.remove_phase(project.phases[0].id)
        assert project == before

    def test_remove_phase_renumbers(self):
        project = Project(planned_date=PLANNED)
        second = project.add_phase()
        third = project.add_phase()
        project.remove_phase(second)
        assert [p.id for p in project.phases][1] == third
        assert [p.phase_number for p in project.phases] == [1, 2]

    def test_move_phase(self):
        project = Project(planned_date=PLANNED)
        first = project.phases[0].id
        second = project.add_phase()
        project.move_phase(second, 0)
        assert project.phase_ids() == [second, first]
        assert project.phase(second).phase_number == 1

    def test_move_phase_out_of_range(self):
        project = Project()
        with pytest.raises(InvariantViolation):
            project.move_phase(project.phases[0].id, 3)

    def test_unknown_phase(self):
        with pytest.raises(NotFoundError):
            Project().phase("missing")

    def test_total_budget(self):
        project = Project(planned_date=PLANNED)
        project.add_phase()
        for i, phase in enumerate(project.phases, start=1):
            dept = phase.departments[0]
            dept.edit_line_item(dept.line_items[0].id, quantity=str(i), unit_price="1000")
        assert project.total_budget == Decimal("3000.00")
        assert project.total_budget == sum(p.budget for p in project.phases)
        assert project.total_budget_text == "3,000.00"

    def test_validate_phase_name(self):
        project = Project()
        project.phases[0].phase_name = "foundation"
        second = project.add_phase()
        assert project.validate_phase_name(second, "Foundation").name == "Foundation"
        assert project.validate_phase_name(second, "Foundation2") is None


class TestProjectTeam:
    """Test manager and team selection"""

    def test_team_members_are_a_set_in_insertion_order(self):
        project = Project()
        project.add_team_member("b")
        project.add_team_member("a")
        project.add_team_member("b")
        assert project.team_member_ids == ["b", "a"]
        project.remove_team_member("b")
        assert project.team_member_ids == ["a"]

    def test_single_manager(self):
        project = Project()
        project.set_manager("m1")
        project.set_manager("m2")
        assert project.manager_id == "m2"
        project.set_manager("")
        assert project.manager_id is None


class TestProjectDerivedValues:
    """Test derived dates and data detection"""

    def test_handover_and_maintenance(self):
        project = Project(planned_date=PLANNED, phases=[
            Phase(start_date=date(2025, 1, 1), end_date=date(2025, 1, 20)),
            Phase(start_date=date(2025, 1, 21), end_date=date(2025, 1, 31)),
        ])
        assert project.handover_date == date(2025, 1, 31)
        assert project.maintenance_date == date(2025, 2, 28)

    def test_has_any_data(self):
        project = Project()
        assert not project.has_any_data
        project.phases[0].departments[0].name = "Civil"
        assert project.has_any_data


class TestLoadTemplate:
    """Test seeding from a template"""

    @pytest.fixture
    def template(self):
        return BuiltinTemplateCatalog().get_template("residential_building")

    def test_replaces_phases(self, template):
        project = Project(project_name="Old", client="Someone", planned_date=PLANNED)
        project.add_team_member("u1")
        project.load_template(template)

        assert project.project_name == ""
        assert project.client == ""
        assert project.team_member_ids == []
        assert project.project_type == "residential_building"
        assert project.location == template.location
        assert [p.phase_name for p in project.phases] == ["Foundation", "Superstructure"]
        assert [p.phase_number for p in project.phases] == [1, 2]
        assert project.phases[1].start_date == PLANNED + timedelta(days=46)

    def test_instances_are_independent(self, template):
        first = Project(planned_date=PLANNED)
        second = Project(planned_date=PLANNED)
        first.load_template(template)
        second.load_template(template)
        assert set(first.phase_ids()).isdisjoint(second.phase_ids())

        dept = first.phases[0].departments[0]
        dept.edit_line_item(dept.line_items[0].id, quantity="1")
        assert second.phases[0].departments[0].line_items[0].quantity == Decimal("120")
        assert template.phases[0].departments[0].line_items[0].quantity == "120"

    def test_template_amounts(self, template):
        project = Project(planned_date=PLANNED)
        project.load_template(template)
        excavation = project.phases[0].departments[0]
        assert excavation.amount == Decimal("173000.00")  # 120 x 650 + 10 x 9,500


class TestLoadForEditing:
    """Test hydration from a submitted project document"""

    @pytest.fixture
    def document(self):
        return {
            "name": "Tower A",
            "description": "Residential tower",
            "client": "Acme",
            "location": "Pune",
            "currency": "INR",
            "plannedDate": "01/01/2025",
            "managerIds": ["manager@example.com"],
            "teamMembers": ["+911", "+912"],
            "Allow_Template_Overrides": True,
            "phases": [
                {
                    "phaseNumber": 2,
                    "phaseName": "Finishing",
                    "startDate": "01/03/2025",
                    "endDate": "30/04/2025",
                    "departments": [],
                },
                {
                    "phaseNumber": 1,
                    "phaseName": "Foundation",
                    "startDate": "05/01/2025",
                    "endDate": "28/02/2025",
                    "categories": ["Civil"],
                    "departments": [{
                        "name": "Civil",
                        "contractorMode": "Turnkey",
                        "totalBudget": "9000.00",
                        "lineItems": [{
                            "itemType": "Raw material", "item": "Cement", "spec": "OPC 53",
                            "quantity": "20.00", "uom": "Bag", "unitPrice": "400.00",
                        }],
                    }],
                },
            ],
        }

    def test_hydrates_and_switches_context(self, document):
        project = Project()
        project.load_for_editing(document, "p-1")

        assert project.context is AuthoringContext.EDITING
        assert project.is_editing
        assert project.editing_project_id == "p-1"
        assert project.project_name == "Tower A"
        assert project.planned_date == PLANNED
        assert project.manager_id == "manager@example.com"
        assert project.team_member_ids == ["+911", "+912"]
        assert project.allow_template_overrides is True

    def test_phases_ordered_by_number(self, document):
        project = Project()
        project.load_for_editing(document, "p-1")
        assert [p.phase_name for p in project.phases] == ["Foundation", "Finishing"]
        assert project.phases[0].start_date == date(2025, 1, 5)
        assert len(project.phases[1].departments) == 1  # placeholder

    @pytest.mark.parametrize("field,value", [
        ("startDate", "31/02/2025"),
        ("endDate", "tomorrow"),
        ("phaseNumber", "second"),
    ])
    def test_malformed_phase_leaves_project_unchanged(self, document, field, value):
        document["phases"][1][field] = value
        project = Project(project_name="Draft", planned_date=PLANNED)
        project.add_phase()
        before = copy.deepcopy(project)

        with pytest.raises(ValueError):
            project.load_for_editing(document, "p-1")

        assert project == before
        assert project.context is AuthoringContext.NEW
        assert project.editing_project_id is None
        assert project.project_name == "Draft"

    def test_malformed_amount_leaves_project_unchanged(self, document):
        document["phases"][1]["departments"][0]["lineItems"][0]["quantity"] = "1e27"
        project = Project(project_name="Draft", planned_date=PLANNED)
        before = copy.deepcopy(project)

        with pytest.raises(ParseError):
            project.load_for_editing(document, "p-1")
        assert project == before

    def test_missing_phase_number_sorts_first(self, document):
        document["phases"][0]["phaseNumber"] = None
        project = Project()
        project.load_for_editing(document, "p-1")
        assert [p.phase_name for p in project.phases] == ["Finishing", "Foundation"]
        assert [p.phase_number for p in project.phases] == [1, 2]

    def test_stored_department_budget_wins(self, document):
        project = Project()
        project.load_for_editing(document, "p-1")
        civil = project.phases[0].departments[0]
        assert civil.contractor_mode is ContractorMode.TURNKEY
        assert civil.amount == Decimal("9000.00")
        assert civil.line_items[0].quantity_text == "20.00"
        civil.edit_line_item(civil.line_items[0].id, quantity="10")
        assert civil.amount == Decimal("4000.00")


class TestProjectSerialization:
    """Test snapshot dict conversion"""

    def test_round_trip(self):
        project = Project(project_name="Tower", planned_date=PLANNED, currency="INR")
        project.add_phase()
        project.phases[0].departments = [Department(name="Civil")]
        project.set_manager("m1")
        project.add_team_member("u1")
        assert Project.from_dict(project.to_dict()) == project
