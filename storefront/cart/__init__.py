"""
Cart Package

Client-side shopping cart: line identity, the observable store and the
product customization flow.
"""

from storefront.cart.models import CartLineItem, CartModifiers, line_key, make_line_id
from storefront.cart.store import CartStore
from storefront.cart.customization import (
    CloseReason,
    CustomizationIncompleteError,
    ModifierChoice,
    ProductCustomization,
    DEFAULT_BREADS,
    DEFAULT_SIDES,
)

__all__ = [
    "CartLineItem",
    "CartModifiers",
    "CartStore",
    "CloseReason",
    "CustomizationIncompleteError",
    "ModifierChoice",
    "ProductCustomization",
    "DEFAULT_BREADS",
    "DEFAULT_SIDES",
    "line_key",
    "make_line_id",
]
