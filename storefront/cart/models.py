"""
Cart Data Structures

A cart line is identified by its product plus the selected modifiers.
Identical selections share one line; the quantity carries the repetition.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass(frozen=True)
class CartModifiers:
    """
    Selections attached to a cart line.

    Attributes:
        bread: Chosen bread, if any
        side: Chosen side dish, if any
        side_price_cents: Extra charged for the side (0 when included)
        bread_price_cents: Extra charged for the bread (0 when included)
    """
    bread: Optional[str] = None
    side: Optional[str] = None
    side_price_cents: int = 0
    bread_price_cents: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.bread or self.side or self.side_price_cents or self.bread_price_cents)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bread": self.bread,
            "side": self.side,
            "sidePriceCents": self.side_price_cents,
            "breadPriceCents": self.bread_price_cents,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Optional["CartModifiers"]:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise TypeError(f"modifiers must be an object, got {type(data).__name__}")
        return cls(
            bread=data.get("bread"),
            side=data.get("side"),
            side_price_cents=int(data.get("sidePriceCents") or 0),
            bread_price_cents=int(data.get("breadPriceCents") or 0),
        )


def line_key(product_id: str, modifiers: Optional[CartModifiers] = None) -> tuple[str, str, str, int, int]:
    """Normalized identity of a line; a missing value equals an empty one."""
    modifiers = modifiers or CartModifiers()
    return (
        product_id,
        modifiers.bread or "",
        modifiers.side or "",
        modifiers.side_price_cents or 0,
        modifiers.bread_price_cents or 0,
    )


def make_line_id(product_id: str, modifiers: Optional[CartModifiers] = None) -> str:
    """
    Stable string id for a line.

    The key is JSON-encoded, so modifier values containing separators or
    quotes cannot make two different selections share an id.
    """
    return json.dumps(line_key(product_id, modifiers), ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class CartLineItem:
    """
    One row of the cart.

    Attributes:
        id: Composite line id (see make_line_id)
        product_id: Menu product identifier
        name: Product name, denormalized for display
        unit_price_cents: Final unit price (base + modifier deltas)
        quantity: Always >= 1 while the line exists
        modifiers: Selections that make this line distinct
    """
    id: str
    product_id: str
    name: str
    unit_price_cents: int
    quantity: int = 1
    modifiers: Optional[CartModifiers] = field(default=None)

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted snapshot form."""
        return {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "unitPriceCents": self.unit_price_cents,
            "quantity": self.quantity,
            "modifiers": self.modifiers.to_dict() if self.modifiers else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CartLineItem":
        """
        Rebuild a line from its snapshot form.

        The id is recomputed from product and modifiers so snapshots written
        with another id scheme still merge correctly.

        Raises:
            KeyError, TypeError, ValueError: If the entry is malformed
        """
        product_id = str(data["productId"])
        modifiers = CartModifiers.from_dict(data.get("modifiers"))
        quantity = int(data["quantity"])
        unit_price_cents = int(data["unitPriceCents"])
        if quantity < 1:
            raise ValueError(f"Invalid quantity {quantity}")
        if unit_price_cents < 0:
            raise ValueError(f"Invalid unit price {unit_price_cents}")
        return cls(
            id=make_line_id(product_id, modifiers),
            product_id=product_id,
            name=str(data["name"]),
            unit_price_cents=unit_price_cents,
            quantity=quantity,
            modifiers=modifiers,
        )
