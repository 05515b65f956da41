"""Application service: Cart Store.

The single writer of the terminal's Cart.  Every mutation, including
one that turns out to be a no-op, is followed by a totals recompute and
a publish to the customer display, so neither the local total nor the
customer screen is ever more than one publish behind.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pos.application.display_sync import DisplaySynchronizer
from pos.domain.model.cart import Cart, LineItem
from pos.domain.model.product import Product
from pos.domain.service.tax_policy import TotalsSnapshot, compute_totals

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[LineItem, ...], TotalsSnapshot], None]


class CartStore:

    def __init__(
        self,
        synchronizer: DisplaySynchronizer | None = None,
        cart: Cart | None = None,
    ) -> None:
        self._cart = cart if cart is not None else Cart()
        self._synchronizer = synchronizer
        self._listeners: list[Listener] = []

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> LineItem:
        item = self._cart.add(product)
        logger.debug("Added %s (qty now %d)", product.id, item.quantity.value)
        self._changed()
        return item

    def remove(self, product_id: str) -> bool:
        removed = self._cart.remove(product_id)
        self._changed()
        return removed

    def adjust_quantity(self, product_id: str, delta: int) -> bool:
        changed = self._cart.adjust_quantity(product_id, delta)
        if not changed:
            logger.debug("Quantity change %+d on %s ignored", delta, product_id)
        self._changed()
        return changed

    def release(self, lines: tuple[LineItem, ...]) -> None:
        self._cart.release(lines)
        self._changed()

    def clear(self) -> None:
        self._cart.clear()
        self._changed()

    # --- Queries --------------------------------------------------------------

    def totals(self) -> TotalsSnapshot:
        return compute_totals(self._cart.items)

    def snapshot(self) -> tuple[LineItem, ...]:
        return self._cart.items

    @property
    def item_count(self) -> int:
        return self._cart.item_count

    @property
    def is_empty(self) -> bool:
        return self._cart.is_empty

    # --- Observers ------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def publish(self) -> None:
        """Push the current state to listeners and the customer display."""
        self._changed()

    def _changed(self) -> None:
        items = self._cart.items
        totals = compute_totals(items)
        for listener in self._listeners:
            listener(items, totals)
        if self._synchronizer is not None:
            self._synchronizer.publish(items, totals)
