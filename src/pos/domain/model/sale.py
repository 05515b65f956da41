"""Sale: a cart that the ledger has accepted.

Created only after a successful commit and never changed afterwards.
The terminal keeps it around just long enough to render and print the
receipt.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pos.domain.model.cart import LineItem
from pos.domain.model.value_objects import Money
from pos.domain.service.tax_policy import TotalsSnapshot


@dataclass(frozen=True)
class CommitResult:
    """What the ledger returns for an accepted checkout."""

    sale_id: str


@dataclass(frozen=True)
class Sale:
    id: str
    items: tuple[LineItem, ...]
    totals: TotalsSnapshot
    committed_at: datetime

    @property
    def grand_total(self) -> Money:
        return self.totals.grand_total
