"""
Tracura - Field References

Pointer to the first invalid field of a project tree, used for focus
scrolling and inline error maps.
"""
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import ValidationError


class FieldKind(str, Enum):
    PROJECT_NAME = "projectName"
    DESCRIPTION = "description"
    CLIENT = "client"
    LOCATION = "location"
    PHASE_NAME = "name"
    PHASE_DATES = "dates"
    PHASE_DEPARTMENTS = "departments"
    PHASE_TIMELINE = "timeline"
    DEPARTMENT_NAME = "dept_name"
    DEPARTMENT_LINE_ITEMS = "dept_lineItems"
    LINE_ITEM_UOM = "uom"

    @property
    def is_project_level(self) -> bool:
        return self in (FieldKind.PROJECT_NAME, FieldKind.DESCRIPTION, FieldKind.CLIENT, FieldKind.LOCATION)


@dataclass(frozen=True)
class FieldRef:
    """
    Reference to one invalid field.

    Equality ignores the attached error, so two walks over the same tree
    produce equal references.
    """

    kind: FieldKind
    phase_id: str | None = None
    department_id: str | None = None
    line_item_id: str | None = None
    error: ValidationError | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> str:
        """
        Stable string key.

        Examples:
            "projectName", "phase_<id>_dates", "phase_<id>_dept_<id>_name",
            "phase_<id>_dept_<id>_item_<id>_uom"
        """
        if self.kind.is_project_level:
            return self.kind.value
        parts = [f"phase_{self.phase_id}"]
        if self.department_id is not None:
            parts.append(f"dept_{self.department_id}")
        if self.line_item_id is not None:
            parts.append(f"item_{self.line_item_id}")
        suffix = self.kind.value
        if self.department_id is not None and suffix.startswith("dept_"):
            suffix = suffix[len("dept_"):]
        parts.append(suffix)
        return "_".join(parts)

    @property
    def message(self) -> str:
        return self.error.message if self.error is not None else ""
