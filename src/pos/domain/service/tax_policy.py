"""Domain service: Tax Policy.

Sales and service tax (SST) is charged at a flat rate on lines whose
product is flagged tax-applicable.  All sums are exact; rounding to
cents happens only when a total is displayed or transmitted, so a long
cart never accumulates per-line rounding drift.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pos.domain.model.cart import LineItem
from pos.domain.model.value_objects import Money

TAX_RATE = Decimal("0.06")


@dataclass(frozen=True)
class TotalsSnapshot:
    subtotal: Money
    tax_amount: Money
    grand_total: Money

    def rounded(self) -> TotalsSnapshot:
        return TotalsSnapshot(
            subtotal=self.subtotal.rounded(),
            tax_amount=self.tax_amount.rounded(),
            grand_total=self.grand_total.rounded(),
        )


def line_tax(item: LineItem, rate: Decimal = TAX_RATE) -> Money:
    if not item.product.is_tax_applicable:
        return Money.zero(item.product.price.currency)
    return item.line_total * rate


def compute_totals(
    items: Iterable[LineItem],
    rate: Decimal = TAX_RATE,
    currency: str = "MYR",
) -> TotalsSnapshot:
    """Derive subtotal, tax and grand total from the given lines."""
    subtotal = Money.zero(currency)
    tax_amount = Money.zero(currency)
    for item in items:
        subtotal = subtotal + item.line_total
        tax_amount = tax_amount + line_tax(item, rate)
    return TotalsSnapshot(
        subtotal=subtotal,
        tax_amount=tax_amount,
        grand_total=subtotal + tax_amount,
    )
