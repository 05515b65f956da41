"""Display synchronization: mirror the live cart to customer displays.

The channel is a best-effort, fire-and-forget pub/sub:

- every publish carries the full cart state, never a delta,
- nothing is stored; a display that is not subscribed misses the
  message and catches up on the next publish,
- there is no acknowledgment, retry or replay.

A newly opened display asks for the current state via ``resync()``
instead of relying on history.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pos.domain.model.cart import LineItem
from pos.domain.service.tax_policy import TotalsSnapshot

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_NAME = "pos_cart_channel"


@dataclass(frozen=True)
class BroadcastLine:
    product_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class BroadcastMessage:
    """Wire shape pushed to customer displays.

    Amounts are already rounded to cents; this is the transmission
    point.
    """

    items: tuple[BroadcastLine, ...]
    subtotal: str
    tax_amount: str
    grand_total: str

    @staticmethod
    def from_cart(items: Iterable[LineItem], totals: TotalsSnapshot) -> BroadcastMessage:
        return BroadcastMessage(
            items=tuple(
                BroadcastLine(
                    product_id=item.product_id,
                    name=item.product.name,
                    quantity=item.quantity.value,
                    unit_price=item.product.price.as_wire(),
                    line_total=item.line_total.as_wire(),
                )
                for item in items
            ),
            subtotal=totals.subtotal.as_wire(),
            tax_amount=totals.tax_amount.as_wire(),
            grand_total=totals.grand_total.as_wire(),
        )

    def to_dict(self) -> dict:
        return {
            "items": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price,
                    "line_total": line.line_total,
                }
                for line in self.items
            ],
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "grand_total": self.grand_total,
        }


Handler = Callable[[BroadcastMessage], None]


@dataclass
class BroadcastChannel:
    """A named channel.  Subscribers see messages in publish order."""

    name: str
    _handlers: list[Handler] = field(default_factory=list)

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def publish(self, message: BroadcastMessage) -> int:
        """Deliver *message* to current subscribers.

        Returns how many handlers received it.  Zero subscribers means
        the message is dropped.  A failing handler is logged and skipped.
        """
        if not self._handlers:
            logger.debug("No listeners on '%s'; message dropped", self.name)
            return 0
        delivered = 0
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception:
                logger.exception("Display handler on '%s' failed", self.name)
                continue
            delivered += 1
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)


class BroadcastHub:
    """Registry of named channels shared by everything in one process."""

    def __init__(self) -> None:
        self._channels: dict[str, BroadcastChannel] = {}

    def channel(self, name: str = DEFAULT_CHANNEL_NAME) -> BroadcastChannel:
        if name not in self._channels:
            self._channels[name] = BroadcastChannel(name)
        return self._channels[name]


class DisplaySynchronizer:
    """Publishes cart snapshots; remembers only the last message."""

    def __init__(self, channel: BroadcastChannel) -> None:
        self._channel = channel
        self.last_message: BroadcastMessage | None = None

    @property
    def channel(self) -> BroadcastChannel:
        return self._channel

    def publish(self, items: Iterable[LineItem], totals: TotalsSnapshot) -> BroadcastMessage:
        message = BroadcastMessage.from_cart(items, totals)
        self.last_message = message
        self._channel.publish(message)
        return message

    def resync(self) -> None:
        """Re-send the current state, e.g. when a display has just opened."""
        if self.last_message is not None:
            self._channel.publish(self.last_message)
