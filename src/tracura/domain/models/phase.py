"""
Tracura - Phase Domain Model

Time-boxed stage of a project. Owns departments and derives its budget from
their amounts.
"""
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from ..dates import parse_date
from ..exceptions import (
    DateOrderError,
    DateRangeError,
    DuplicateNameError,
    InvariantViolation,
    NotFoundError,
    ValidationError,
)
from ..money import ZERO, format_grouped
from .department import Department
from .ids import new_id

DEFAULT_PHASE_LENGTH_DAYS = 30


def _normalize_name(name: str) -> str:
    return name.strip().lower()


@dataclass
class Phase:
    """
    Project phase with a date window and departments.

    The department list is never empty.
    """

    id: str = field(default_factory=new_id)
    phase_number: int = 1
    phase_name: str = ""
    start_date: date = field(default_factory=date.today)
    end_date: date | None = None  # Defaults to start + 30 days
    departments: list[Department] = field(default_factory=lambda: [Department()])
    categories: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.end_date is None:
            self.end_date = self.start_date + timedelta(days=DEFAULT_PHASE_LENGTH_DAYS)
        if not self.departments:
            self.departments = [Department()]

    @property
    def trimmed_name(self) -> str:
        return self.phase_name.strip()

    @property
    def budget(self) -> Decimal:
        """Sum of department amounts."""
        return self.recompute_budget()

    @property
    def budget_text(self) -> str:
        return format_grouped(self.budget)

    def recompute_budget(self) -> Decimal:
        return sum((d.amount for d in self.departments), ZERO)

    @property
    def has_named_department(self) -> bool:
        return any(d.is_named for d in self.departments)

    # Departments

    def department(self, department_id: str) -> Department:
        """
        Get department by id.

        Raises:
            NotFoundError: If no department has this id
        """
        for department in self.departments:
            if department.id == department_id:
                return department
        raise NotFoundError(
            f"Department not found: {department_id}", entity_type="department", entity_id=department_id
        )

    def add_department(self) -> str:
        """Append an empty department and return its id."""
        department = Department()
        self.departments.append(department)
        return department.id

    def remove_department(self, department_id: str) -> None:
        """
        Remove a department.

        Raises:
            NotFoundError: If no department has this id
            InvariantViolation: If it is the phase's last department
        """
        target = self.department(department_id)
        if len(self.departments) == 1:
            raise InvariantViolation(
                "A phase must keep at least one department",
                entity_type="department",
                entity_id=department_id,
            )
        self.departments = [d for d in self.departments if d is not target]

    # Validation helpers

    def validate_dates(self, planned_date: date | None) -> ValidationError | None:
        """
        Check the date window against the project planned date.

        Returns:
            DateRangeError if start precedes the planned date,
            DateOrderError if end is not strictly after start, else None
        """
        if planned_date is not None and self.start_date < planned_date:
            return DateRangeError(
                f"Phase start date must be on or after planned start date ({planned_date:%d %b %Y})",
                field_name="start_date",
            )
        if self.end_date <= self.start_date:
            return DateOrderError("End date must be after start date", field_name="end_date")
        return None

    def validate_name(self, candidate: str, siblings: Iterable["Phase"]) -> DuplicateNameError | None:
        """
        Check a candidate phase name against sibling phases (trimmed, case-insensitive).

        Args:
            candidate: Proposed phase name
            siblings: All phases of the project (this phase is skipped)

        Returns:
            DuplicateNameError naming the candidate, or None
        """
        normalized = _normalize_name(candidate)
        if not normalized:
            return None
        for other in siblings:
            if other.id == self.id:
                continue
            if _normalize_name(other.phase_name) == normalized:
                return DuplicateNameError(
                    f"\"{candidate.strip()}\" already exists in this project. Enter a unique phase name.",
                    name=candidate.strip(),
                    field_name="phase_name",
                )
        return None

    def validate_department_name(self, department_id: str, candidate: str) -> DuplicateNameError | None:
        """Check a department name against the other departments of this phase."""
        normalized = _normalize_name(candidate)
        if not normalized:
            return None
        phase_label = self.trimmed_name or f"Phase {self.phase_number}"
        for other in self.departments:
            if other.id == department_id:
                continue
            if _normalize_name(other.name) == normalized:
                return DuplicateNameError(
                    f"\"{candidate.strip()}\" already exists in \"{phase_label}\". Enter a unique department name.",
                    name=candidate.strip(),
                    field_name="department_name",
                )
        return None

    def copy_fresh(self) -> "Phase":
        """Independent deep copy with fresh identities."""
        return Phase(
            phase_number=self.phase_number,
            phase_name=self.phase_name,
            start_date=self.start_date,
            end_date=self.end_date,
            departments=[d.copy_fresh() for d in self.departments],
            categories=list(self.categories),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for snapshots)."""
        return {
            "id": self.id,
            "phaseNumber": self.phase_number,
            "phaseName": self.phase_name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "categories": list(self.categories),
            "departments": [d.to_dict() for d in self.departments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Phase":
        """
        Create Phase from a snapshot.

        Raises:
            ValueError: If a stored date is malformed
        """
        start = parse_date(data.get("startDate")) or date.today()
        end = parse_date(data.get("endDate")) or start + timedelta(days=DEFAULT_PHASE_LENGTH_DAYS)
        return cls(
            id=data.get("id") or new_id(),
            phase_number=int(data.get("phaseNumber", 1)),
            phase_name=data.get("phaseName", "") or "",
            start_date=start,
            end_date=end,
            departments=[Department.from_dict(d) for d in data.get("departments") or []],
            categories=list(data.get("categories") or []),
        )
