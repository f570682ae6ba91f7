"""
Tracura - Project Template Models

Immutable template definitions used to seed a new project. Instantiation
always produces fresh, independent Phase/Department/LineItem trees.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta

from .department import ContractorMode, Department
from .line_item import LineItem
from .phase import Phase


@dataclass(frozen=True)
class TemplateLineItem:
    """Line item as defined in a template (quantity/price as display text)."""

    item_type: str
    item: str
    spec: str
    quantity: str
    unit_price: str
    uom: str = ""

    def instantiate(self) -> LineItem:
        line_item = LineItem(item_type=self.item_type, item=self.item, spec=self.spec, uom=self.uom)
        line_item.set_quantity(self.quantity)
        line_item.set_unit_price(self.unit_price)
        return line_item


@dataclass(frozen=True)
class TemplateDepartment:
    name: str
    contractor_mode: ContractorMode = ContractorMode.LABOUR_ONLY
    line_items: tuple[TemplateLineItem, ...] = ()

    def instantiate(self) -> Department:
        return Department(
            name=self.name,
            contractor_mode=self.contractor_mode,
            line_items=[li.instantiate() for li in self.line_items],
        )


@dataclass(frozen=True)
class TemplatePhase:
    """
    Phase as defined in a template.

    Dates are offsets from the project planned date so a template can be
    applied to any project.
    """

    phase_name: str
    start_offset_days: int
    duration_days: int
    departments: tuple[TemplateDepartment, ...] = ()
    categories: tuple[str, ...] = ()

    def __post_init__(self):
        if self.start_offset_days < 0:
            raise ValueError(f"Start offset cannot be negative: {self.start_offset_days}")
        if self.duration_days <= 0:
            raise ValueError(f"Duration must be positive: {self.duration_days}")

    def instantiate(self, planned_date: date, phase_number: int) -> Phase:
        start = planned_date + timedelta(days=self.start_offset_days)
        return Phase(
            phase_number=phase_number,
            phase_name=self.phase_name,
            start_date=start,
            end_date=start + timedelta(days=self.duration_days),
            departments=[d.instantiate() for d in self.departments],
            categories=list(self.categories),
        )


@dataclass(frozen=True)
class TemplateSummary:
    """Catalog entry shown before a template is chosen."""

    id: str
    name: str
    description: str
    phase_count: int
    department_count: int


@dataclass(frozen=True)
class ProjectTemplate:
    """Named phase/department/line-item tree."""

    id: str
    name: str
    description: str
    phases: tuple[TemplatePhase, ...]
    location: str = ""
    currency: str = "INR"
    allow_template_overrides: bool = False
    business_types: tuple[str, ...] = field(default_factory=tuple)

    def summary(self) -> TemplateSummary:
        return TemplateSummary(
            id=self.id,
            name=self.name,
            description=self.description,
            phase_count=len(self.phases),
            department_count=sum(len(p.departments) for p in self.phases),
        )

    def matches_business_type(self, business_type: str | None) -> bool:
        """True when unfiltered, or when the business type is listed (case-insensitive)."""
        if not business_type or not business_type.strip():
            return True
        wanted = business_type.strip().lower()
        return any(bt.lower() == wanted for bt in self.business_types)

    def instantiate_phases(self, planned_date: date) -> list[Phase]:
        """Fresh phases numbered from 1 (a single empty phase for an empty template)."""
        phases = [p.instantiate(planned_date, i) for i, p in enumerate(self.phases, start=1)]
        return phases or [Phase(phase_number=1, start_date=planned_date)]
