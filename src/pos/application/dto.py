"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.model.cart import LineItem
from pos.domain.service.tax_policy import TotalsSnapshot


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the operator."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "RM 15.00"
    line_total: str
    taxable: bool


@dataclass(frozen=True)
class CartDTO:
    """Output: the whole cart with its rounded totals."""

    items: list[CartLineDTO]
    item_count: int
    subtotal: str
    tax_amount: str
    grand_total: str


def to_cart_dto(items: tuple[LineItem, ...], totals: TotalsSnapshot) -> CartDTO:
    return CartDTO(
        items=[
            CartLineDTO(
                product_id=item.product_id,
                product_name=item.product.name,
                quantity=item.quantity.value,
                unit_price=str(item.product.price),
                line_total=str(item.line_total),
                taxable=item.product.is_tax_applicable,
            )
            for item in items
        ],
        item_count=sum(item.quantity.value for item in items),
        subtotal=str(totals.subtotal),
        tax_amount=str(totals.tax_amount),
        grand_total=str(totals.grand_total),
    )
