"""Customer-facing display.

Subscribes to the broadcast channel and renders whatever the last
message said.  Holds no cart state of its own.
"""

from __future__ import annotations

from collections.abc import Callable

from pos.application.display_sync import BroadcastChannel, BroadcastMessage

EMPTY_TEXT = "Awaiting items..."


class CustomerDisplay:

    def __init__(
        self,
        channel: BroadcastChannel,
        on_render: Callable[[str], None] | None = None,
        currency_symbol: str = "RM",
    ) -> None:
        self._channel = channel
        self._on_render = on_render
        self._symbol = currency_symbol
        self._unsubscribe: Callable[[], None] | None = None
        self.last_message: BroadcastMessage | None = None

    def open(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._channel.subscribe(self.receive)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    def receive(self, message: BroadcastMessage) -> None:
        self.last_message = message
        if self._on_render is not None:
            self._on_render(self.render())

    def render(self) -> str:
        message = self.last_message
        lines = ["Your Order", "Thank you for shopping with us!", ""]
        if message is None or not message.items:
            lines.append(EMPTY_TEXT)
        else:
            for item in message.items:
                label = f"{item.quantity}x {item.name}"
                lines.append(f"{label:<30} {self._symbol} {item.line_total:>9}")
        subtotal = message.subtotal if message else "0.00"
        tax = message.tax_amount if message else "0.00"
        total = message.grand_total if message else "0.00"
        lines += [
            "",
            f"{'Subtotal':<30} {self._symbol} {subtotal:>9}",
            f"{'SST (6%)':<30} {self._symbol} {tax:>9}",
            f"{'Total':<30} {self._symbol} {total:>9}",
        ]
        return "\n".join(lines)
