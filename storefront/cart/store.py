"""
Cart Store

Observable, persisted collection of cart lines.

Every state change:
    1. replaces the immutable tuple of lines
    2. writes the snapshot to the cart storage under a fixed key
       (a storage failure is logged; the in-memory cart stays authoritative)
    3. notifies subscribed listeners with the new lines

Operations on unknown line ids are silent no-ops. All calls are expected
from one thread, one at a time.

Usage:
    from storefront.cart import CartStore, CartModifiers

    cart = CartStore()
    cart.add_item("p1", "Burger", 620, CartModifiers("Tradicional", "Boniato", 120))
    print(cart.subtotal_cents())
"""

import json
import logging
from typing import Callable, Iterable, Optional

from storefront.cart.models import CartLineItem, CartModifiers, make_line_id
from storefront.core.config import get_settings
from storefront.services.cart_storage import BaseCartStorage, CartStorageError, get_cart_storage

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

CartListener = Callable[[tuple[CartLineItem, ...]], None]


class CartStore:
    """
    Shopping cart state holder.

    Attributes:
        storage: Durable key-value backend
        key: Key the snapshot is persisted under
    """

    def __init__(
        self,
        storage: Optional[BaseCartStorage] = None,
        key: Optional[str] = None,
    ):
        self.storage = storage if storage is not None else get_cart_storage()
        self.key = key or get_settings().cart_storage_key
        self._items: tuple[CartLineItem, ...] = self._hydrate()
        self._listeners: list[CartListener] = []

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        """Current lines, in insertion order."""
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def get_line(self, line_id: str) -> Optional[CartLineItem]:
        for item in self._items:
            if item.id == line_id:
                return item
        return None

    def subtotal_cents(self) -> int:
        """Sum of unit price x quantity over all lines."""
        return sum(item.line_total_cents for item in self._items)

    def item_count(self) -> int:
        """Total units in the cart."""
        return sum(item.quantity for item in self._items)

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a listener called with the new lines after each change.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def add_item(
        self,
        product_id: str,
        name: str,
        unit_price_cents: int,
        modifiers: Optional[CartModifiers] = None,
    ) -> CartLineItem:
        """
        Add one unit of a product with the given modifiers.

        An existing line with the same product and modifiers gets its
        quantity incremented; otherwise a new line with quantity 1 is
        appended.

        Returns:
            The resulting line

        Raises:
            ValueError: If the unit price is negative
        """
        if unit_price_cents < 0:
            raise ValueError(f"unit_price_cents must be >= 0, got {unit_price_cents}")

        line_id = make_line_id(product_id, modifiers)
        existing = self.get_line(line_id)

        if existing is not None:
            updated = existing.with_quantity(existing.quantity + 1)
            self._set(updated if item.id == line_id else item for item in self._items)
            return updated

        line = CartLineItem(
            id=line_id,
            product_id=product_id,
            name=name,
            unit_price_cents=unit_price_cents,
            quantity=1,
            modifiers=modifiers,
        )
        self._set((*self._items, line))
        logger.debug(f"Cart line added: {name} ({line_id})")
        return line

    def increment(self, line_id: str) -> None:
        """quantity += 1 for the line; no-op if absent."""
        if self.get_line(line_id) is None:
            return
        self._set(
            item.with_quantity(item.quantity + 1) if item.id == line_id else item
            for item in self._items
        )

    def decrement(self, line_id: str) -> None:
        """quantity -= 1 for the line, dropping it at zero; no-op if absent."""
        if self.get_line(line_id) is None:
            return
        updated = (
            item.with_quantity(item.quantity - 1) if item.id == line_id else item
            for item in self._items
        )
        self._set(item for item in updated if item.quantity > 0)

    def remove(self, line_id: str) -> None:
        """Delete the line; no-op if absent."""
        if self.get_line(line_id) is None:
            return
        self._set(item for item in self._items if item.id != line_id)

    def clear(self) -> None:
        """Empty the cart."""
        self._set(())

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def _set(self, items: Iterable[CartLineItem]) -> None:
        self._items = tuple(items)
        try:
            self._persist()
        except CartStorageError as e:
            logger.warning(f"Cart snapshot not saved under {self.key}, keeping it in memory: {e}")
        for listener in list(self._listeners):
            listener(self._items)

    def _persist(self) -> None:
        snapshot = {
            "version": SNAPSHOT_VERSION,
            "items": [item.to_dict() for item in self._items],
        }
        self.storage.set_item(self.key, json.dumps(snapshot, ensure_ascii=False))

    def _hydrate(self) -> tuple[CartLineItem, ...]:
        """Read the persisted snapshot once; anything unreadable starts empty."""
        try:
            raw = self.storage.get_item(self.key)
        except CartStorageError as e:
            logger.warning(f"Cart snapshot unavailable, starting empty: {e}")
            return ()

        if not raw:
            return ()

        try:
            data = json.loads(raw)
            entries = data["items"] if isinstance(data, dict) else data
            lines: dict[str, CartLineItem] = {}
            for entry in entries:
                line = CartLineItem.from_dict(entry)
                if line.id in lines:
                    previous = lines[line.id]
                    line = previous.with_quantity(previous.quantity + line.quantity)
                lines[line.id] = line
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding corrupted cart snapshot under {self.key}: {e}")
            return ()

        logger.debug(f"Cart restored with {len(lines)} lines")
        return tuple(lines.values())
