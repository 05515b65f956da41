"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure.  The concrete implementation talks to the backend over
HTTP; tests use an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.product import Product


class CatalogRepository(ABC):

    @abstractmethod
    async def list_all(self) -> list[Product]:
        """Return every product in catalog order."""

    @abstractmethod
    async def get_by_code(self, code: str) -> Product:
        """Return the product for a scanned code.

        Raises ``LookupNotFoundError`` if no product matches and
        ``LookupTransportError`` for any other failure.
        """
