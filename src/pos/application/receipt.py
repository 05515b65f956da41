"""Receipt rendering for 80 mm thermal paper."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

from pos.domain.model.sale import Sale

WIDTH = 42


@dataclass(frozen=True)
class StoreInfo:
    name: str
    address: str = ""
    phone: str = ""
    cashier: str = "Admin"


def render_receipt(sale: Sale, store: StoreInfo) -> str:
    rule = "-" * WIDTH
    lines: list[str] = [store.name.center(WIDTH)]
    for part in textwrap.wrap(store.address, WIDTH):
        lines.append(part.center(WIDTH))
    if store.phone:
        lines.append(f"Tel: {store.phone}".center(WIDTH))
    lines.append(rule)

    lines.append(f"Date: {sale.committed_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"Order #: {sale.id or 'PENDING'}")
    lines.append(f"Cashier: {store.cashier}")
    lines.append(rule)

    lines.append(f"{'Qty':<4} {'Item':<26} {'Price':>10}")
    for item in sale.items:
        name = item.product.name[:26]
        lines.append(
            f"{item.quantity.value:<4} {name:<26} {item.line_total.as_wire():>10}"
        )
    lines.append(rule)

    totals = sale.totals
    lines.append(_total_row("Subtotal:", str(totals.subtotal)))
    lines.append(_total_row("SST (6%):", str(totals.tax_amount)))
    lines.append(_total_row("TOTAL:", str(totals.grand_total)))
    lines.append(rule)

    lines.append("Thank you for your visit!".center(WIDTH))
    lines.append("Please come again.".center(WIDTH))
    return "\n".join(lines) + "\n"


def _total_row(label: str, amount: str) -> str:
    return f"{label:<{WIDTH - 16}}{amount:>16}"
