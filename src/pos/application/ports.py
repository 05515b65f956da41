"""Outbound ports for the terminal's user-facing side effects.

The application layer only knows these interfaces; the CLI provides
console implementations and tests provide recording fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.sale import Sale


class TerminalView(ABC):

    @abstractmethod
    def warn(self, message: str) -> None:
        """Show a transient, non-blocking warning."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show an error the operator must notice."""

    @abstractmethod
    def open_cart(self) -> None:
        """Bring the cart panel into view."""

    @abstractmethod
    def close_cart(self) -> None:
        """Dismiss the cart panel."""

    @abstractmethod
    def show_receipt(self, sale: Sale) -> None:
        """Populate the receipt view with *sale* ahead of printing."""


class ReceiptPrinter(ABC):

    @abstractmethod
    def print_receipt(self, sale: Sale) -> None:
        """Render the current receipt and hand it to the printer."""
