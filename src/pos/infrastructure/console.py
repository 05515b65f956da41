"""Console implementations of the terminal's view and printer ports."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from pos.application.ports import ReceiptPrinter, TerminalView
from pos.application.receipt import StoreInfo, render_receipt
from pos.domain.model.sale import Sale

logger = logging.getLogger(__name__)


class ConsoleView(TerminalView):

    def __init__(self) -> None:
        self.cart_open = False
        self.current_sale: Sale | None = None

    def warn(self, message: str) -> None:
        click.secho(message, fg="yellow", err=True)

    def alert(self, message: str) -> None:
        click.secho(message, fg="red", bold=True, err=True)

    def open_cart(self) -> None:
        self.cart_open = True

    def close_cart(self) -> None:
        self.cart_open = False

    def show_receipt(self, sale: Sale) -> None:
        self.current_sale = sale


class ConsolePrinter(ReceiptPrinter):
    """Writes the receipt to stdout."""

    def __init__(self, store: StoreInfo) -> None:
        self._store = store

    def print_receipt(self, sale: Sale) -> None:
        click.echo(render_receipt(sale, self._store))


class FilePrinter(ReceiptPrinter):
    """Spools each receipt to ``<directory>/receipt-<sale id>.txt``."""

    def __init__(self, store: StoreInfo, directory: Path) -> None:
        self._store = store
        self._directory = directory

    def print_receipt(self, sale: Sale) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / f"receipt-{sale.id}.txt"
        path.write_text(render_receipt(sale, self._store), encoding="utf-8")
        logger.info("Receipt for sale %s written to %s", sale.id, path)
