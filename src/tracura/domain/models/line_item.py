"""
Tracura - Line Item Domain Model

Smallest budget unit: quantity x unit price at a unit of measure.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..exceptions import ParseError
from ..money import ZERO, format_grouped, money_product, parse_amount
from .catalog import is_labour, uom_options_for
from .ids import new_id


def _parse_non_negative(raw: str, field_name: str) -> Decimal:
    value = parse_amount(raw)
    if value < 0:
        raise ParseError(f"{field_name} cannot be negative: '{raw}'", raw=raw, field_name=field_name)
    return value


def _display_text(value: Any) -> str:
    """Display text for a stored quantity/price (numbers are re-grouped)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return format_grouped(parse_amount(value))


@dataclass
class LineItem:
    """
    Budget row of a department.

    Keeps both the raw display text typed by the user and the parsed Decimal.
    The total is always derived from quantity x unit price.
    """

    id: str = field(default_factory=new_id)
    item_type: str = ""
    item: str = ""
    spec: str = ""
    uom: str = ""
    quantity_text: str = ""
    unit_price_text: str = ""
    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        """quantity x unit price, rounded half-up to 2 places."""
        return money_product(self.quantity, self.unit_price)

    @property
    def has_item_type(self) -> bool:
        return bool(self.item_type.strip())

    @property
    def is_labour(self) -> bool:
        return is_labour(self.item_type)

    @property
    def spec_required(self) -> bool:
        """Spec is required for every item type except Labour."""
        return not self.is_labour

    @property
    def is_blank(self) -> bool:
        """True when nothing has been filled in on this row."""
        return not any(
            text.strip()
            for text in (self.item_type, self.item, self.spec, self.uom, self.quantity_text, self.unit_price_text)
        ) and self.quantity == ZERO and self.unit_price == ZERO

    def set_quantity(self, raw: str) -> None:
        """
        Set quantity from raw input text.

        Raises:
            ParseError: If the text is not a valid non-negative number
                (the row is left unchanged)
        """
        value = _parse_non_negative(raw, "quantity")
        self.quantity_text = raw
        self.quantity = value

    def set_unit_price(self, raw: str) -> None:
        """
        Set unit price from raw input text.

        Raises:
            ParseError: If the text is not a valid non-negative number
                (the row is left unchanged)
        """
        value = _parse_non_negative(raw, "unit_price")
        self.unit_price_text = raw
        self.unit_price = value

    def switch_item_type(self, new_type: str) -> None:
        """
        Change the item type.

        Crossing the Labour boundary clears item and spec; the UOM is reset
        unless the new type allows it.
        """
        if new_type == self.item_type:
            return
        if is_labour(new_type) != self.is_labour:
            self.item = ""
            self.spec = ""
        if self.uom and self.uom not in uom_options_for(new_type):
            self.uom = ""
        self.item_type = new_type

    def clear_classification(self) -> None:
        """Clear item type, item and spec (quantity, UOM and price are kept)."""
        self.item_type = ""
        self.item = ""
        self.spec = ""

    def copy_fresh(self) -> "LineItem":
        """Independent copy with a new identity."""
        return LineItem(
            item_type=self.item_type,
            item=self.item,
            spec=self.spec,
            uom=self.uom,
            quantity_text=self.quantity_text,
            unit_price_text=self.unit_price_text,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for snapshots)."""
        return {
            "id": self.id,
            "itemType": self.item_type,
            "item": self.item,
            "spec": self.spec,
            "uom": self.uom,
            "quantity": self.quantity_text,
            "unitPrice": self.unit_price_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        """
        Create LineItem from a snapshot, template or submitted document.

        Quantity and unit price may be display text or plain numbers.

        Raises:
            ParseError: If a stored quantity/price is malformed
        """
        line_item = cls(
            id=data.get("id") or new_id(),
            item_type=data.get("itemType", "") or "",
            item=data.get("item", "") or "",
            spec=data.get("spec", "") or "",
            uom=data.get("uom", "") or "",
        )
        line_item.set_quantity(_display_text(data.get("quantity")))
        line_item.set_unit_price(_display_text(data.get("unitPrice")))
        return line_item
