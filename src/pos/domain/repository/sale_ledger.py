"""Abstract sale ledger: the backend that finalizes a checkout."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.cart import LineItem
from pos.domain.model.sale import CommitResult


class SaleLedger(ABC):

    @abstractmethod
    async def commit(self, lines: tuple[LineItem, ...]) -> CommitResult:
        """Record a sale of *lines* (product id + quantity).

        Raises ``CommitFailureError`` carrying the server's message when
        the ledger rejects the sale or cannot be reached.
        """
