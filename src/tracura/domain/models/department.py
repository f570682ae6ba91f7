"""
Tracura - Department Domain Model

Cost-bearing subdivision of a phase. Owns its line items and keeps its
amount equal to the sum of their totals.
"""
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from enum import Enum
from typing import Any

from ..exceptions import InvariantViolation, NotFoundError
from ..money import MAX_TOTAL, ZERO, format_grouped, is_zero_amount_text, parse_amount
from .ids import new_id
from .line_item import LineItem


class ContractorMode(str, Enum):
    """Procurement mode of a department."""

    LABOUR_ONLY = "Labour-Only"
    TURNKEY = "Turnkey"

    @property
    def display_name(self) -> str:
        if self is ContractorMode.LABOUR_ONLY:
            return "Labour-Only (materials + labour)"
        return "Turnkey (materials included)"

    @classmethod
    def parse(cls, value: "str | ContractorMode | None") -> "ContractorMode":
        """Parse stored value ("Labour-Only", "Turnkey" or enum name); unknown -> labour-only."""
        if isinstance(value, ContractorMode):
            return value
        if not value:
            return cls.LABOUR_ONLY
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        for mode in cls:
            if normalized in (mode.value.lower().replace("-", ""), mode.name.lower().replace("_", "")):
                return mode
        return cls.LABOUR_ONLY


def _is_stored_amount(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return not is_zero_amount_text(value)
    return parse_amount(value, MAX_TOTAL) != ZERO


@dataclass
class Department:
    """
    Department with line items and a derived amount.

    The line-item list is never empty: removing the last row is rejected
    (or replaced by an empty placeholder row when requested).
    """

    id: str = field(default_factory=new_id)
    name: str = ""
    contractor_mode: ContractorMode = ContractorMode.LABOUR_ONLY
    line_items: list[LineItem] = field(default_factory=lambda: [LineItem()])
    amount: Decimal = ZERO
    # Stored amount from hydration wins until the first line-item mutation
    amount_is_stored: bool = field(default=False, compare=False, repr=False)

    def __post_init__(self):
        if not self.line_items:
            self.line_items = [LineItem()]
        if not self.amount_is_stored:
            self.amount = self._sum_totals()

    # Derived values

    def _sum_totals(self) -> Decimal:
        return sum((li.total for li in self.line_items), ZERO)

    def recompute_amount(self) -> Decimal:
        """Recompute amount as the sum of line-item totals."""
        self.amount = self._sum_totals()
        self.amount_is_stored = False
        return self.amount

    @property
    def amount_text(self) -> str:
        """Amount rendered with digit grouping."""
        return format_grouped(self.amount)

    @property
    def trimmed_name(self) -> str:
        return self.name.strip()

    @property
    def is_named(self) -> bool:
        return bool(self.trimmed_name)

    # Line items

    def line_item(self, line_item_id: str) -> LineItem:
        """
        Get line item by id.

        Raises:
            NotFoundError: If no line item has this id
        """
        for line_item in self.line_items:
            if line_item.id == line_item_id:
                return line_item
        raise NotFoundError(f"Line item not found: {line_item_id}", entity_type="line_item", entity_id=line_item_id)

    def add_line_item(self) -> str:
        """Append an empty line item and return its id."""
        line_item = LineItem()
        self.line_items.append(line_item)
        self.recompute_amount()
        return line_item.id

    def remove_line_item(self, line_item_id: str, *, keep_placeholder: bool = False) -> None:
        """
        Remove a line item.

        Args:
            line_item_id: Line item to remove
            keep_placeholder: Replace the last remaining row with an empty one
                instead of rejecting the removal

        Raises:
            NotFoundError: If no line item has this id
            InvariantViolation: If it is the last line item and keep_placeholder is False
        """
        target = self.line_item(line_item_id)
        if len(self.line_items) == 1:
            if not keep_placeholder:
                raise InvariantViolation(
                    "A department must keep at least one line item",
                    entity_type="line_item",
                    entity_id=line_item_id,
                )
            self.line_items = [LineItem()]
        else:
            self.line_items = [li for li in self.line_items if li is not target]
        self.recompute_amount()

    def edit_line_item(
        self,
        line_item_id: str,
        *,
        item_type: str | None = None,
        item: str | None = None,
        spec: str | None = None,
        uom: str | None = None,
        quantity: str | None = None,
        unit_price: str | None = None,
    ) -> LineItem:
        """
        Apply user edits to a line item and recompute the amount.

        All edits are staged first, so a ParseError leaves the row untouched.

        Raises:
            NotFoundError: If no line item has this id
            ParseError: If quantity or unit price is malformed
        """
        target = self.line_item(line_item_id)
        staged = replace(target)
        if item_type is not None:
            staged.switch_item_type(item_type)
        if item is not None:
            staged.item = item
        if spec is not None:
            staged.spec = spec
        if uom is not None:
            staged.uom = uom
        if quantity is not None:
            staged.set_quantity(quantity)
        if unit_price is not None:
            staged.set_unit_price(unit_price)

        amount = sum((staged.total if li is target else li.total for li in self.line_items), ZERO)

        for f in fields(LineItem):
            setattr(target, f.name, getattr(staged, f.name))
        self.amount = amount
        self.amount_is_stored = False
        return target

    def set_contractor_mode(self, mode: ContractorMode) -> None:
        """
        Switch contractor mode.

        Turnkey -> labour-only clears item type, item and spec on every row
        whose type is set and is not Labour.
        """
        previous = self.contractor_mode
        self.contractor_mode = mode
        if previous is ContractorMode.TURNKEY and mode is ContractorMode.LABOUR_ONLY:
            for line_item in self.line_items:
                if line_item.has_item_type and not line_item.is_labour:
                    line_item.clear_classification()
            self.recompute_amount()

    def copy_fresh(self) -> "Department":
        """Independent deep copy with fresh identities."""
        return Department(
            name=self.name,
            contractor_mode=self.contractor_mode,
            line_items=[li.copy_fresh() for li in self.line_items],
            amount=self.amount,
            amount_is_stored=self.amount_is_stored,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for snapshots)."""
        return {
            "id": self.id,
            "name": self.name,
            "contractorMode": self.contractor_mode.value,
            "amount": self.amount_text,
            "lineItems": [li.to_dict() for li in self.line_items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Department":
        """
        Hydrate Department from stored/template data.

        A non-zero stored amount takes precedence over the line-item sum until
        the first line-item mutation.
        """
        line_items = [LineItem.from_dict(li) for li in data.get("lineItems") or []]
        stored = data.get("amount")
        if _is_stored_amount(stored):
            return cls(
                id=data.get("id") or new_id(),
                name=data.get("name", "") or "",
                contractor_mode=ContractorMode.parse(data.get("contractorMode")),
                line_items=line_items,
                amount=parse_amount(stored, MAX_TOTAL),
                amount_is_stored=True,
            )
        return cls(
            id=data.get("id") or new_id(),
            name=data.get("name", "") or "",
            contractor_mode=ContractorMode.parse(data.get("contractorMode")),
            line_items=line_items,
        )
