"""Explicit session and catalog context.

Components receive these through their constructors instead of reading
credentials or the product list from process-wide state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pos.domain.exceptions import AuthenticationRequiredError, EntityNotFoundError
from pos.domain.model.product import Product
from pos.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class SessionContext:
    """Who is operating the terminal and the credential to act as them."""

    token: str | None
    username: str = "User"
    role: str = "cashier"

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"

    def bearer(self) -> str:
        if not self.token:
            raise AuthenticationRequiredError("Not signed in: no session token")
        return f"Bearer {self.token}"


class CatalogHandle:
    """The terminal's loaded copy of the catalog.

    Refreshed after startup and after every committed sale (stock levels
    may have changed).  Used for manual "tap to add" and for filtering
    the product grid.
    """

    def __init__(self, repository: CatalogRepository) -> None:
        self._repository = repository
        self._products: list[Product] = []
        self.loaded = False

    async def refresh(self) -> list[Product]:
        self._products = await self._repository.list_all()
        self.loaded = True
        logger.info("Catalog refreshed: %d products", len(self._products))
        return list(self._products)

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Product:
        for product in self._products:
            if product.id == product_id:
                return product
        raise EntityNotFoundError(f"Product not found: '{product_id}'")

    def categories(self) -> list[str]:
        seen: list[str] = []
        for product in self._products:
            if product.category not in seen:
                seen.append(product.category)
        return [ALL_CATEGORIES, *seen]

    def filter(self, search: str = "", category: str = ALL_CATEGORIES) -> list[Product]:
        """Products whose name contains *search* and match *category*."""
        needle = search.lower()
        return [
            p
            for p in self._products
            if needle in p.name.lower()
            and (category == ALL_CATEGORIES or p.category == category)
        ]
