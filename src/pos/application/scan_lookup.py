"""Application service: resolve a scanned code into a cart line.

Steps:
1. Ask the catalog for the product matching the code (suspends).
2. Found: add one unit through the Cart Store and open the cart view.
3. Not found: warn the operator with the unresolved code.
4. Any other lookup failure: log it and leave the cart alone.

The add happens after the lookup resumes and goes through the Cart
Store, which reads the cart as it is at that moment, so scans and
manual edits made while the lookup was outstanding are kept.
"""

from __future__ import annotations

import logging
from enum import Enum

from pos.application.cart_store import CartStore
from pos.application.ports import TerminalView
from pos.domain.exceptions import LookupNotFoundError, LookupTransportError
from pos.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class ScanOutcome(Enum):
    ADDED = "ADDED"
    NOT_FOUND = "NOT_FOUND"
    FAILED = "FAILED"


class ScanLookupHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        cart_store: CartStore,
        view: TerminalView,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._cart_store = cart_store
        self._view = view

    async def handle(self, code: str) -> ScanOutcome:
        try:
            product = await self._catalog_repo.get_by_code(code)
        except LookupNotFoundError as exc:
            logger.info("Scanned code %s not in catalog", code)
            self._view.warn(str(exc))
            return ScanOutcome.NOT_FOUND
        except LookupTransportError as exc:
            logger.warning("Lookup for scanned code %s failed: %s", code, exc)
            return ScanOutcome.FAILED

        self._cart_store.add(product)
        self._view.open_cart()
        return ScanOutcome.ADDED
