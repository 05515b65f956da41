"""Cart aggregate: the order being assembled at the terminal.

The Cart owns its line items and enforces two invariants on every
mutation:

- at most one LineItem per product id (repeat adds merge),
- every LineItem quantity is at least 1.

Totals are never stored here; they are derived by the tax policy from
the current items.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class LineItem:
    """One product and how many units of it are in the cart.

    Frozen so a snapshot handed to checkout or the customer display can
    never be changed behind the cart's back.  Quantity changes replace
    the entry in place.
    """

    product: Product
    quantity: Quantity

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value

    def with_quantity(self, value: int) -> LineItem:
        return replace(self, quantity=Quantity(value))


class Cart:
    """Ordered collection of line items.

    Insertion order is display order.  Quantity edits keep an item's
    position; removing and re-adding a product appends it at the end.
    """

    def __init__(self, items: list[LineItem] | None = None) -> None:
        self._items: list[LineItem] = []
        for item in items or []:
            self._merge(item.product, item.quantity.value)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> LineItem:
        """Add one unit of *product*, merging into an existing line."""
        return self._merge(product, 1)

    def remove(self, product_id: str) -> bool:
        """Drop the line for *product_id*.  Returns False if absent."""
        index = self._index_of(product_id)
        if index is None:
            return False
        del self._items[index]
        return True

    def adjust_quantity(self, product_id: str, delta: int) -> bool:
        """Change a line's quantity by *delta*.

        A change that would take the quantity to zero or below is
        ignored and the line keeps its previous quantity.  Returns True
        only if the quantity actually changed.
        """
        index = self._index_of(product_id)
        if index is None:
            return False
        item = self._items[index]
        new_value = item.quantity.value + delta
        if new_value < 1 or delta == 0:
            return False
        self._items[index] = item.with_quantity(new_value)
        return True

    def release(self, lines: tuple[LineItem, ...] | list[LineItem]) -> None:
        """Subtract already-committed quantities from the cart.

        Lines whose remaining quantity drops to zero or below are
        removed.  Products not in the cart are skipped.
        """
        for line in lines:
            index = self._index_of(line.product_id)
            if index is None:
                continue
            remaining = self._items[index].quantity.value - line.quantity.value
            if remaining >= 1:
                self._items[index] = self._items[index].with_quantity(remaining)
            else:
                del self._items[index]

    def clear(self) -> None:
        self._items.clear()

    # --- Queries --------------------------------------------------------------

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        """Total units across all lines (the cart badge number)."""
        return sum(item.quantity.value for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    # --- Internal helpers -----------------------------------------------------

    def _merge(self, product: Product, qty: int) -> LineItem:
        index = self._index_of(product.id)
        if index is None:
            item = LineItem(product=product, quantity=Quantity(qty))
            self._items.append(item)
        else:
            item = self._items[index].with_quantity(
                self._items[index].quantity.value + qty
            )
            self._items[index] = item
        return item

    def _index_of(self, product_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.product_id == product_id:
                return i
        return None
