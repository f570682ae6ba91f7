"""
Tracura - Validation Engine

Walks the project tree in a fixed order and reports invalid fields.

Order: project fields (name, description, client, location) -> team
(optional) -> each phase (name, dates, departments) -> each department
(name, line items, each line item's UOM) -> phase timeline.
Every member of a duplicate name group is reported, the first one included.

The walk is pure and never raises for an invalid tree; errors are returned
as FieldRefs carrying the ValidationError that explains them.
"""
from collections.abc import Iterable, Iterator

from .exceptions import DateOrderError, DuplicateNameError, RequiredFieldError
from .models.config import ValidationConfig
from .models.department import Department
from .models.field_ref import FieldKind, FieldRef
from .models.phase import Phase
from .models.project import Project

PROJECT_FIELDS = (
    ("name", FieldKind.PROJECT_NAME, "Project name"),
    ("description", FieldKind.DESCRIPTION, "Description"),
    ("client", FieldKind.CLIENT, "Client"),
    ("location", FieldKind.LOCATION, "Location"),
)


def _project_value(project: Project, field_name: str) -> str:
    if field_name == "name":
        return project.project_name
    return getattr(project, field_name)


def _project_field_errors(
    project: Project, project_name_taken: bool, required_fields: Iterable[str]
) -> Iterator[FieldRef]:
    required = set(required_fields) | {"name"}
    for field_name, kind, label in PROJECT_FIELDS:
        value = _project_value(project, field_name).strip()
        if field_name in required and not value:
            yield FieldRef(kind, error=RequiredFieldError(f"{label} is required", field_name=field_name))
        elif field_name == "name" and project_name_taken:
            yield FieldRef(kind, error=DuplicateNameError(
                f"A project named \"{value}\" already exists. Enter a unique project name.",
                name=value,
                field_name=field_name,
            ))


def _department_errors(phase: Phase, department: Department) -> Iterator[FieldRef]:
    if not department.is_named:
        yield FieldRef(
            FieldKind.DEPARTMENT_NAME,
            phase_id=phase.id,
            department_id=department.id,
            error=RequiredFieldError("Department name is required", field_name="department_name"),
        )
    else:
        duplicate = phase.validate_department_name(department.id, department.name)
        if duplicate is not None:
            yield FieldRef(FieldKind.DEPARTMENT_NAME, phase_id=phase.id, department_id=department.id, error=duplicate)

    if not department.line_items:
        yield FieldRef(
            FieldKind.DEPARTMENT_LINE_ITEMS,
            phase_id=phase.id,
            department_id=department.id,
            error=RequiredFieldError("Add at least one line item", field_name="line_items"),
        )

    for line_item in department.line_items:
        # No UOM requirement until an item type is chosen
        if line_item.has_item_type and not line_item.uom.strip():
            yield FieldRef(
                FieldKind.LINE_ITEM_UOM,
                phase_id=phase.id,
                department_id=department.id,
                line_item_id=line_item.id,
                error=RequiredFieldError("Select a unit of measure", field_name="uom"),
            )


def _phase_errors(project: Project, phase: Phase) -> Iterator[FieldRef]:
    if not phase.trimmed_name:
        yield FieldRef(
            FieldKind.PHASE_NAME,
            phase_id=phase.id,
            error=RequiredFieldError("Phase name is required", field_name="phase_name"),
        )
    else:
        duplicate = phase.validate_name(phase.phase_name, project.phases)
        if duplicate is not None:
            yield FieldRef(FieldKind.PHASE_NAME, phase_id=phase.id, error=duplicate)

    date_error = phase.validate_dates(project.planned_date)
    if date_error is not None:
        yield FieldRef(FieldKind.PHASE_DATES, phase_id=phase.id, error=date_error)

    if not phase.has_named_department:
        yield FieldRef(
            FieldKind.PHASE_DEPARTMENTS,
            phase_id=phase.id,
            error=RequiredFieldError("Add at least one department with a name", field_name="departments"),
        )

    for department in phase.departments:
        yield from _department_errors(phase, department)


def _timeline_errors(project: Project) -> Iterator[FieldRef]:
    for previous, current in zip(project.phases, project.phases[1:]):
        if current.start_date <= previous.end_date:
            yield FieldRef(
                FieldKind.PHASE_TIMELINE,
                phase_id=current.id,
                error=DateOrderError(
                    f"Phase {current.phase_number} must start after Phase {previous.phase_number} ends",
                    field_name="start_date",
                ),
            )


def iter_field_errors(
    project: Project,
    *,
    project_name_taken: bool = False,
    required_project_fields: Iterable[str] = ("name",),
    enforce_phase_timeline: bool = False,
) -> Iterator[FieldRef]:
    """
    Yield every invalid field in walk order.

    Args:
        project: Project tree to check
        project_name_taken: Result of the remote name check (True = taken)
        required_project_fields: Project fields that must be non-empty
            (the project name is always required)
        enforce_phase_timeline: Require each phase to start after the
            previous one ends

    Yields:
        FieldRef for each violation
    """
    yield from _project_field_errors(project, project_name_taken, required_project_fields)
    # Team selection (manager, members) is optional: nothing to report
    for phase in project.phases:
        yield from _phase_errors(project, phase)
    if enforce_phase_timeline:
        yield from _timeline_errors(project)


def validate_and_find_first_invalid_field(
    project: Project,
    *,
    project_name_taken: bool = False,
    required_project_fields: Iterable[str] = ("name",),
    enforce_phase_timeline: bool = False,
) -> FieldRef | None:
    """
    Find the first invalid field of the project tree.

    The result is deterministic for a given tree, so callers can use it to
    decide where to move focus.

    Returns:
        FieldRef of the first violation, or None if the tree is valid
    """
    return next(
        iter_field_errors(
            project,
            project_name_taken=project_name_taken,
            required_project_fields=required_project_fields,
            enforce_phase_timeline=enforce_phase_timeline,
        ),
        None,
    )


def collect_field_errors(
    project: Project,
    *,
    project_name_taken: bool = False,
    required_project_fields: Iterable[str] = ("name",),
    enforce_phase_timeline: bool = False,
) -> list[FieldRef]:
    """All violations in walk order (for inline error messages)."""
    return list(iter_field_errors(
        project,
        project_name_taken=project_name_taken,
        required_project_fields=required_project_fields,
        enforce_phase_timeline=enforce_phase_timeline,
    ))


class ProjectValidator:
    """Validation engine bound to a ValidationConfig."""

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or ValidationConfig()

    def first_invalid_field(self, project: Project, *, project_name_taken: bool = False) -> FieldRef | None:
        return validate_and_find_first_invalid_field(
            project,
            project_name_taken=project_name_taken,
            required_project_fields=self.config.required_project_fields,
            enforce_phase_timeline=self.config.enforce_phase_timeline,
        )

    def all_errors(self, project: Project, *, project_name_taken: bool = False) -> list[FieldRef]:
        return collect_field_errors(
            project,
            project_name_taken=project_name_taken,
            required_project_fields=self.config.required_project_fields,
            enforce_phase_timeline=self.config.enforce_phase_timeline,
        )
