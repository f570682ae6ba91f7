"""
Tracura - Project Domain Model

Aggregate root of the project-creation form: project fields, team
selection and the ordered phase tree.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

from ..dates import add_months, parse_date
from ..exceptions import DuplicateNameError, InvariantViolation, NotFoundError
from ..money import MAX_TOTAL, ZERO, format_grouped, parse_amount
from .department import Department
from .ids import new_id
from .phase import DEFAULT_PHASE_LENGTH_DAYS, Phase
from .template import ProjectTemplate

DEFAULT_CURRENCY = "INR"

# Phases appended after the first one
ADDED_PHASE_LENGTH_DAYS = 31


class AuthoringContext(str, Enum):
    """How the form was opened."""

    NEW = "new"
    EDITING = "editing"


def _initial_phase(planned_date: date) -> Phase:
    return Phase(
        phase_number=1,
        start_date=planned_date,
        end_date=planned_date + timedelta(days=DEFAULT_PHASE_LENGTH_DAYS),
    )


def _submitted_line_item(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "itemType": data.get("itemType", ""),
        "item": data.get("item", ""),
        "spec": data.get("spec", ""),
        "uom": data.get("uom", ""),
        "quantity": parse_amount(data.get("quantity")),
        "unitPrice": parse_amount(data.get("unitPrice")),
    }


def _submitted_department(data: dict[str, Any]) -> Department:
    total = data.get("totalBudget", data.get("amount"))
    return Department.from_dict({
        "id": data.get("id"),
        "name": data.get("name", ""),
        "contractorMode": data.get("contractorMode"),
        "amount": parse_amount(total, MAX_TOTAL),
        "lineItems": [_submitted_line_item(li) for li in data.get("lineItems") or []],
    })


@dataclass
class Project:
    """
    Project form state.

    Phases are kept ordered and numbered 1..n; the phase list is never empty.
    """

    project_name: str = ""
    description: str = ""
    client: str = ""
    location: str = ""
    planned_date: date = field(default_factory=date.today)
    currency: str = DEFAULT_CURRENCY
    phases: list[Phase] = field(default_factory=list)
    manager_id: str | None = None
    team_member_ids: list[str] = field(default_factory=list)
    attachment_url: str | None = None
    attachment_name: str | None = None
    allow_template_overrides: bool = False
    project_type: str | None = None
    context: AuthoringContext = AuthoringContext.NEW
    editing_project_id: str | None = None

    def __post_init__(self):
        if not self.phases:
            self.phases = [_initial_phase(self.planned_date)]
        self.renumber_phases()

    # Derived values

    @property
    def total_budget(self) -> Decimal:
        return self.recompute_total_budget()

    def recompute_total_budget(self) -> Decimal:
        """Sum of phase budgets."""
        return sum((p.budget for p in self.phases), ZERO)

    @property
    def total_budget_text(self) -> str:
        return format_grouped(self.total_budget)

    @property
    def is_editing(self) -> bool:
        return self.context is AuthoringContext.EDITING

    @property
    def handover_date(self) -> date:
        """Latest phase end date."""
        return max(p.end_date for p in self.phases)

    @property
    def maintenance_date(self) -> date:
        """One calendar month after handover."""
        return add_months(self.handover_date, 1)

    @property
    def has_any_data(self) -> bool:
        """True when anything beyond the defaults has been entered."""
        if any(text.strip() for text in (self.project_name, self.description, self.client, self.location)):
            return True
        if self.manager_id or self.team_member_ids or self.attachment_url:
            return True
        for phase in self.phases:
            if phase.trimmed_name or phase.budget != ZERO:
                return True
            for department in phase.departments:
                if department.is_named or any(not li.is_blank for li in department.line_items):
                    return True
        return False

    # Phases

    def phase(self, phase_id: str) -> Phase:
        """
        Get phase by id.

        Raises:
            NotFoundError: If no phase has this id
        """
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        raise NotFoundError(f"Phase not found: {phase_id}", entity_type="phase", entity_id=phase_id)

    def phase_ids(self) -> list[str]:
        return [p.id for p in self.phases]

    def renumber_phases(self) -> None:
        for number, phase in enumerate(self.phases, start=1):
            phase.phase_number = number

    def add_phase(self) -> str:
        """
        Append a phase and return its id.

        The new phase starts the day after the last phase ends (never before
        the planned date) and lasts 31 days.
        """
        start = self.planned_date
        if self.phases:
            start = max(self.phases[-1].end_date + timedelta(days=1), self.planned_date)
        phase = Phase(start_date=start, end_date=start + timedelta(days=ADDED_PHASE_LENGTH_DAYS))
        self.phases.append(phase)
        self.renumber_phases()
        return phase.id

    def remove_phase(self, phase_id: str) -> None:
        """
        Remove a phase and renumber the rest.

        Raises:
            NotFoundError: If no phase has this id
            InvariantViolation: If it is the only phase
        """
        target = self.phase(phase_id)
        if len(self.phases) == 1:
            raise InvariantViolation("A project must keep at least one phase", entity_type="phase", entity_id=phase_id)
        self.phases = [p for p in self.phases if p is not target]
        self.renumber_phases()

    def move_phase(self, phase_id: str, new_index: int) -> None:
        """
        Move a phase to a new position (0-based) and renumber.

        Raises:
            NotFoundError: If no phase has this id
            InvariantViolation: If the index is out of range
        """
        target = self.phase(phase_id)
        if not 0 <= new_index < len(self.phases):
            raise InvariantViolation(
                f"Phase index out of range: {new_index}", entity_type="phase", entity_id=phase_id
            )
        remaining = [p for p in self.phases if p is not target]
        remaining.insert(new_index, target)
        self.phases = remaining
        self.renumber_phases()

    def validate_phase_name(self, phase_id: str, candidate: str) -> DuplicateNameError | None:
        return self.phase(phase_id).validate_name(candidate, self.phases)

    # Team

    def set_manager(self, manager_id: str | None) -> None:
        self.manager_id = manager_id or None

    def add_team_member(self, member_id: str) -> None:
        if member_id not in self.team_member_ids:
            self.team_member_ids.append(member_id)

    def remove_team_member(self, member_id: str) -> None:
        self.team_member_ids = [m for m in self.team_member_ids if m != member_id]

    # Seeding

    def load_template(self, template: ProjectTemplate) -> None:
        """
        Replace the phase tree with a fresh copy of a template.

        Name, client, description and team are cleared; location, currency
        and the overrides flag come from the template.
        """
        self.project_name = ""
        self.client = ""
        self.description = ""
        self.location = template.location
        self.currency = template.currency or DEFAULT_CURRENCY
        self.allow_template_overrides = template.allow_template_overrides
        self.manager_id = None
        self.team_member_ids = []
        self.phases = template.instantiate_phases(self.planned_date)
        self.project_type = template.id
        self.renumber_phases()

    def load_for_editing(self, document: dict[str, Any], project_id: str) -> None:
        """
        Hydrate from a submitted project document and switch to editing.

        The whole document is parsed before any field is assigned, so a
        malformed document leaves the project unchanged.

        Args:
            document: Submitted project document (dates as dd/MM/yyyy)
            project_id: Id of the submitted project

        Raises:
            ValueError: If a stored date or phase number is malformed
            ParseError: If a stored amount is malformed
        """
        planned_date = parse_date(document.get("plannedDate")) or self.planned_date

        phases = []
        for phase_doc in sorted(document.get("phases") or [], key=lambda p: int(p.get("phaseNumber") or 0)):
            start = parse_date(phase_doc.get("startDate")) or planned_date
            end = parse_date(phase_doc.get("endDate")) or start + timedelta(days=DEFAULT_PHASE_LENGTH_DAYS)
            phases.append(Phase(
                id=phase_doc.get("id") or new_id(),
                phase_name=phase_doc.get("phaseName", "") or "",
                start_date=start,
                end_date=end,
                departments=[_submitted_department(d) for d in phase_doc.get("departments") or []],
                categories=list(phase_doc.get("categories") or []),
            ))

        manager_ids = document.get("managerIds") or []
        team_member_ids = []
        for member_id in document.get("teamMembers") or []:
            if member_id not in team_member_ids:
                team_member_ids.append(member_id)

        self.context = AuthoringContext.EDITING
        self.editing_project_id = project_id
        self.project_name = document.get("name", "") or ""
        self.description = document.get("description", "") or ""
        self.client = document.get("client", "") or ""
        self.location = document.get("location", "") or ""
        self.currency = document.get("currency") or DEFAULT_CURRENCY
        self.planned_date = planned_date
        self.allow_template_overrides = bool(document.get("Allow_Template_Overrides", False))
        self.project_type = document.get("projectType")
        self.attachment_url = document.get("attachmentURL")
        self.attachment_name = document.get("attachmentName")
        self.manager_id = manager_ids[0] if manager_ids else None
        self.team_member_ids = team_member_ids
        self.phases = phases or [_initial_phase(planned_date)]
        self.renumber_phases()

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for snapshots)."""
        return {
            "projectName": self.project_name,
            "description": self.description,
            "client": self.client,
            "location": self.location,
            "plannedDate": self.planned_date.isoformat(),
            "currency": self.currency,
            "phases": [p.to_dict() for p in self.phases],
            "managerId": self.manager_id,
            "teamMemberIds": list(self.team_member_ids),
            "attachmentURL": self.attachment_url,
            "attachmentName": self.attachment_name,
            "allowTemplateOverrides": self.allow_template_overrides,
            "projectType": self.project_type,
            "context": self.context.value,
            "editingProjectId": self.editing_project_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """
        Create Project from a snapshot.

        Raises:
            ValueError: If a stored date or context is malformed
            ParseError: If a stored amount is malformed
        """
        team: list[str] = []
        for member_id in data.get("teamMemberIds") or []:
            if member_id not in team:
                team.append(member_id)
        return cls(
            project_name=data.get("projectName", "") or "",
            description=data.get("description", "") or "",
            client=data.get("client", "") or "",
            location=data.get("location", "") or "",
            planned_date=parse_date(data.get("plannedDate")) or date.today(),
            currency=data.get("currency") or DEFAULT_CURRENCY,
            phases=[Phase.from_dict(p) for p in data.get("phases") or []],
            manager_id=data.get("managerId"),
            team_member_ids=team,
            attachment_url=data.get("attachmentURL"),
            attachment_name=data.get("attachmentName"),
            allow_template_overrides=bool(data.get("allowTemplateOverrides", False)),
            project_type=data.get("projectType"),
            context=AuthoringContext(data.get("context") or AuthoringContext.NEW.value),
            editing_project_id=data.get("editingProjectId"),
        )
