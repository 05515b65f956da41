"""Tests for the console and file receipt printers."""

from datetime import datetime, timezone

from pos.application.receipt import StoreInfo
from pos.domain.model.cart import Cart
from pos.domain.model.sale import Sale
from pos.domain.service.tax_policy import compute_totals
from pos.infrastructure.console import ConsolePrinter, ConsoleView, FilePrinter
from tests.fakes import make_product


def _sale() -> Sale:
    cart = Cart()
    cart.add(make_product("1", "Milo 1kg", "10.00"))
    return Sale(
        id="9",
        items=cart.items,
        totals=compute_totals(cart.items),
        committed_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


class TestPrinters:

    def test_file_printer_spools_receipt(self, tmp_path):
        printer = FilePrinter(StoreInfo(name="Nine mini mart"), tmp_path / "spool")
        printer.print_receipt(_sale())
        text = (tmp_path / "spool" / "receipt-9.txt").read_text(encoding="utf-8")
        assert "Order #: 9" in text
        assert "RM 10.60" in text

    def test_console_printer_echoes(self, capsys):
        ConsolePrinter(StoreInfo(name="Nine mini mart")).print_receipt(_sale())
        assert "Nine mini mart" in capsys.readouterr().out


class TestConsoleView:

    def test_cart_panel_and_receipt_state(self):
        view = ConsoleView()
        view.open_cart()
        assert view.cart_open
        sale = _sale()
        view.show_receipt(sale)
        view.close_cart()
        assert not view.cart_open
        assert view.current_sale is sale

    def test_warn_goes_to_stderr(self, capsys):
        ConsoleView().warn("Item Not Found in Database: 000")
        assert "Item Not Found" in capsys.readouterr().err
