"""
Product Customization Flow

Transient bread/side selection for a single product. Nothing touches the
cart until the selection is confirmed; cancelling discards it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from storefront.cart.models import CartLineItem, CartModifiers
from storefront.core.config import get_settings
from storefront.schemas import MenuProduct, MenuResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModifierChoice:
    """A selectable option and its price delta in cents."""
    name: str
    price_cents: int = 0


DEFAULT_BREADS = (
    ModifierChoice("Tradicional"),
    ModifierChoice("Queso cheddar"),
    ModifierChoice("Mantequilla"),
    ModifierChoice("Lechuga de mar y aceitunas"),
    ModifierChoice("Cúrcuma y jengibre"),
    ModifierChoice("Tomate y pesto picante"),
    ModifierChoice("Alga nori y sésamo"),
    ModifierChoice("Tomate y pesto"),
)

DEFAULT_SIDES = (
    ModifierChoice("Patatas fritas (incluido)", 0),
    ModifierChoice("Boniato", 120),
)


class CloseReason(str, Enum):
    """How the customization panel was dismissed."""
    CLOSE_BUTTON = "close_button"
    OVERLAY = "overlay"
    ESCAPE_KEY = "escape_key"


class CustomizationIncompleteError(Exception):
    """Raised when confirming without both required selections."""


class ProductCustomization:
    """
    Selection state for one product.

    Both groups are required, single-select. The total shown to the user is
    the product base price plus the bread and side price deltas.

    Example:
        >>> flow = ProductCustomization(product)
        >>> flow.select_bread("Tradicional")
        >>> flow.select_side("Boniato")
        >>> flow.total_cents
        620
        >>> flow.confirm(cart)
    """

    def __init__(
        self,
        product: MenuProduct,
        bread_options: Sequence[ModifierChoice] = DEFAULT_BREADS,
        side_options: Sequence[ModifierChoice] = DEFAULT_SIDES,
    ):
        self.product = product
        self.bread_options = tuple(bread_options)
        self.side_options = tuple(side_options)
        self.is_open = True
        self.bread: Optional[str] = None
        self.side: Optional[str] = None
        self.bread_price_cents = 0
        self.side_price_cents = 0

    @classmethod
    def from_menu(cls, menu: MenuResponse, product: MenuProduct) -> "ProductCustomization":
        """
        Build the flow with the tenant's own bread and side groups.

        Groups missing from the menu (or empty) fall back to the defaults.
        """
        settings = get_settings()
        breads = _choices(menu, settings.bread_group_slug) or DEFAULT_BREADS
        sides = _choices(menu, settings.side_group_slug) or DEFAULT_SIDES
        return cls(product, bread_options=breads, side_options=sides)

    # =========================================================================
    # SELECTION
    # =========================================================================

    def select_bread(self, name: str) -> None:
        for option in self.bread_options:
            if option.name == name:
                self.bread = name
                self.bread_price_cents = option.price_cents
                return
        raise ValueError(f"Unknown bread option: {name}")

    def select_side(self, name: str) -> None:
        for option in self.side_options:
            if option.name == name:
                self.side = name
                self.side_price_cents = option.price_cents
                return
        raise ValueError(f"Unknown side option: {name}")

    @property
    def can_add(self) -> bool:
        return self.is_open and bool(self.bread) and bool(self.side)

    @property
    def total_cents(self) -> int:
        return self.product.base_price_cents + self.bread_price_cents + self.side_price_cents

    # =========================================================================
    # OUTCOMES
    # =========================================================================

    def confirm(self, cart) -> CartLineItem:
        """
        Hand the selection to the cart and close.

        Raises:
            CustomizationIncompleteError: If bread or side is missing
        """
        if not self.can_add:
            raise CustomizationIncompleteError(
                f"Choose a bread and a side for {self.product.name}"
            )

        line = cart.add_item(
            self.product.id,
            self.product.name,
            self.total_cents,
            CartModifiers(
                bread=self.bread,
                side=self.side,
                side_price_cents=self.side_price_cents,
                bread_price_cents=self.bread_price_cents,
            ),
        )
        self._reset()
        return line

    def cancel(self, reason: CloseReason = CloseReason.CLOSE_BUTTON) -> None:
        """Discard the selection without touching the cart."""
        logger.debug(f"Customization of {self.product.name} cancelled ({reason.value})")
        self._reset()

    def _reset(self) -> None:
        self.bread = None
        self.side = None
        self.bread_price_cents = 0
        self.side_price_cents = 0
        self.is_open = False


def _choices(menu: MenuResponse, slug: str) -> tuple[ModifierChoice, ...]:
    group = menu.find_modifier_group(slug)
    if group is None:
        return ()
    return tuple(ModifierChoice(o.name, o.price_delta_cents) for o in group.options)
