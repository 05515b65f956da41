"""The terminal session: input events in, cart changes and sales out.

Key events go through the scan decoder.  A completed scan starts a
catalog lookup as a background task, so further key presses and manual
cart edits are handled while the lookup is outstanding.
"""

from __future__ import annotations

import asyncio
import logging

from pos.application.cart_store import CartStore
from pos.application.checkout import CheckoutOrchestrator
from pos.application.context import CatalogHandle, SessionContext
from pos.application.scan_lookup import ScanLookupHandler, ScanOutcome
from pos.domain.model.cart import LineItem
from pos.domain.model.sale import Sale
from pos.domain.service.scan_decoder import KeyEvent, ScanDecoder

logger = logging.getLogger(__name__)


class PosTerminal:

    def __init__(
        self,
        session: SessionContext,
        catalog: CatalogHandle,
        cart_store: CartStore,
        decoder: ScanDecoder,
        scan_handler: ScanLookupHandler,
        checkout: CheckoutOrchestrator,
    ) -> None:
        self.session = session
        self.catalog = catalog
        self.cart_store = cart_store
        self._decoder = decoder
        self._scan_handler = scan_handler
        self._checkout = checkout
        self._lookups: set[asyncio.Task] = set()

    # --- Input ----------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> asyncio.Task | None:
        """Feed one key event; returns the lookup task if a scan completed."""
        scanned = self._decoder.feed(event)
        if scanned is None:
            return None
        logger.debug("Scanned %s", scanned.code)
        task = asyncio.create_task(self._scan_handler.handle(scanned.code))
        self._lookups.add(task)
        task.add_done_callback(self._lookups.discard)
        return task

    async def scan(self, code: str) -> ScanOutcome:
        """Look up a code directly, bypassing keystroke decoding."""
        return await self._scan_handler.handle(code)

    async def wait_for_lookups(self) -> list[ScanOutcome]:
        if not self._lookups:
            return []
        return list(await asyncio.gather(*list(self._lookups)))

    # --- Manual cart edits ----------------------------------------------------

    def add_product(self, product_id: str) -> LineItem:
        return self.cart_store.add(self.catalog.get(product_id))

    def increment(self, product_id: str) -> bool:
        return self.cart_store.adjust_quantity(product_id, 1)

    def decrement(self, product_id: str) -> bool:
        return self.cart_store.adjust_quantity(product_id, -1)

    def remove(self, product_id: str) -> bool:
        return self.cart_store.remove(product_id)

    # --- Checkout -------------------------------------------------------------

    async def checkout(self) -> Sale:
        return await self._checkout.checkout()

    async def wait_idle(self) -> None:
        await self.wait_for_lookups()
        await self._checkout.wait_idle()
