"""Product as seen by the terminal.

Products are owned by the external catalog. The terminal only reads
them: prices, stock and the tax flag are whatever the catalog returned
on the last fetch.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A catalog product.

    Frozen because the core never edits catalog data; a refreshed
    catalog produces new Product instances.
    """

    id: str
    sku: str
    name: str
    price: Money
    category: str = ""
    stock_quantity: int = 0
    is_tax_applicable: bool = False
    image_url: str | None = None
