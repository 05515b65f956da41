"""Application service: Checkout Orchestrator.

State machine::

    IDLE -> SUBMITTING -> COMMITTED -> IDLE
                       -> FAILED    -> IDLE

While SUBMITTING the live cart is not touched; the ledger sees only
the snapshot taken when checkout started.  A failed commit leaves the
cart exactly as it was, so calling ``checkout()`` again is a safe
retry.  Only one commit may be outstanding per orchestrator.

On success, in order: the Sale is built from the snapshot, shown in
the receipt view, the committed lines are cleared from the cart, the
cart view is closed, a catalog refresh is started, and the receipt is
printed once after a short delay so the receipt view can render first.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum

from pos.application.cart_store import CartStore
from pos.application.context import CatalogHandle
from pos.application.ports import ReceiptPrinter, TerminalView
from pos.domain.exceptions import (
    CheckoutInProgressError,
    CommitFailureError,
    DomainException,
    ValidationError,
)
from pos.domain.model.sale import Sale
from pos.domain.repository.sale_ledger import SaleLedger

logger = logging.getLogger(__name__)

DEFAULT_PRINT_DELAY = 0.5  # seconds


class CheckoutState(Enum):
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"
    COMMITTED = "COMMITTED"
    FAILED = "FAILED"


class CheckoutOrchestrator:

    def __init__(
        self,
        cart_store: CartStore,
        ledger: SaleLedger,
        view: TerminalView,
        printer: ReceiptPrinter,
        catalog: CatalogHandle | None = None,
        print_delay: float = DEFAULT_PRINT_DELAY,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._cart_store = cart_store
        self._ledger = ledger
        self._view = view
        self._printer = printer
        self._catalog = catalog
        self._print_delay = print_delay
        self._clock = clock
        self._background: set[asyncio.Task] = set()
        self.state = CheckoutState.IDLE
        self.last_sale: Sale | None = None
        self.last_error: str | None = None

    @property
    def in_flight(self) -> bool:
        return self.state == CheckoutState.SUBMITTING

    async def checkout(self) -> Sale:
        if self.in_flight:
            raise CheckoutInProgressError("A checkout is already being submitted")
        if self._cart_store.is_empty:
            raise ValidationError("Cart is empty")

        items = self._cart_store.snapshot()
        totals = self._cart_store.totals()
        self.state = CheckoutState.SUBMITTING
        logger.info(
            "Submitting checkout: %d lines, total %s", len(items), totals.grand_total
        )

        try:
            result = await self._ledger.commit(items)
        except CommitFailureError as exc:
            self._fail(str(exc))
            raise
        except DomainException as exc:
            self._fail(CommitFailureError.GENERIC_MESSAGE)
            raise CommitFailureError() from exc
        except Exception as exc:
            logger.exception("Ledger raised an unexpected error")
            self._fail(CommitFailureError.GENERIC_MESSAGE)
            raise CommitFailureError() from exc
        except BaseException:
            self.state = CheckoutState.IDLE
            raise

        self.state = CheckoutState.COMMITTED
        sale = Sale(
            id=result.sale_id,
            items=items,
            totals=totals,
            committed_at=self._clock(),
        )
        self.last_sale = sale
        self.last_error = None
        logger.info("Sale %s committed", sale.id)

        self._view.show_receipt(sale)

        # The cart may have been edited while the commit was outstanding.
        if self._cart_store.snapshot() == items:
            self._cart_store.clear()
        else:
            logger.warning("Cart changed during checkout of sale %s", sale.id)
            self._cart_store.release(items)

        self._view.close_cart()
        if self._catalog is not None:
            self._spawn(self._refresh_catalog())
        self._spawn(self._print_later(sale))

        self.state = CheckoutState.IDLE
        return sale

    async def wait_idle(self) -> None:
        """Wait for the deferred print and catalog refresh to finish."""
        while self._background:
            await asyncio.gather(*list(self._background))

    # --- Internal helpers -----------------------------------------------------

    def _fail(self, message: str) -> None:
        self.state = CheckoutState.FAILED
        self.last_error = message
        logger.error("Checkout failed: %s", message)
        self._view.alert(message)
        self.state = CheckoutState.IDLE

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _print_later(self, sale: Sale) -> None:
        await asyncio.sleep(self._print_delay)
        try:
            self._printer.print_receipt(sale)
        except Exception:
            logger.exception("Printing receipt for sale %s failed", sale.id)

    async def _refresh_catalog(self) -> None:
        try:
            await self._catalog.refresh()
        except DomainException as exc:
            logger.warning("Catalog refresh after checkout failed: %s", exc)
        except Exception:
            logger.exception("Catalog refresh after checkout failed")
