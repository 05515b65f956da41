"""Tests for receipt rendering."""

from datetime import datetime, timezone

from pos.application.receipt import StoreInfo, render_receipt
from pos.domain.model.cart import Cart
from pos.domain.model.sale import Sale
from pos.domain.service.tax_policy import compute_totals
from tests.fakes import make_product

STORE = StoreInfo(
    name="Nine mini mart",
    address="A-0-3, PV5 Platinum Hill Condo, 53100 Kuala Lumpur",
    phone="+60 17-847 4356",
    cashier="aina",
)


def _sale() -> Sale:
    cart = Cart()
    cart.add(make_product("1", "Milo 1kg", "10.00", taxable=True))
    cart.add(make_product("1", "Milo 1kg", "10.00", taxable=True))
    cart.add(make_product("2", "Gardenia Bread", "5.00", taxable=False))
    return Sale(
        id="1042",
        items=cart.items,
        totals=compute_totals(cart.items),
        committed_at=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
    )


class TestRenderReceipt:

    def test_header_and_meta(self):
        text = render_receipt(_sale(), STORE)
        assert "Nine mini mart" in text
        assert "Tel: +60 17-847 4356" in text
        assert "Order #: 1042" in text
        assert "Cashier: aina" in text
        assert "Date: 2026-03-01 09:30:00" in text

    def test_lines_and_totals(self):
        lines = render_receipt(_sale(), STORE).splitlines()
        assert any(l.startswith("2") and "Milo 1kg" in l and l.endswith("20.00") for l in lines)
        assert any(l.startswith("Subtotal:") and l.endswith("RM 25.00") for l in lines)
        assert any(l.startswith("SST (6%):") and l.endswith("RM 1.20") for l in lines)
        assert any(l.startswith("TOTAL:") and l.endswith("RM 26.20") for l in lines)

    def test_footer(self):
        text = render_receipt(_sale(), STORE)
        assert "Thank you for your visit!" in text
        assert text.endswith("\n")
