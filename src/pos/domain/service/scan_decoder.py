"""Domain service: Scan Decoder.

A USB barcode reader behaves like a keyboard that types very fast: it
emits the code's characters a few milliseconds apart and finishes with
Enter.  The decoder watches every key event on the terminal and tells a
scanner burst apart from a person typing by the gap between keys.

Rules, applied per event:

1. Keys typed into a text-entry field are ignored outright; the buffer
   and the timer are left alone so a scan cannot eat filter-box input.
2. If more than ``gap_threshold`` seconds passed since the previous key,
   whatever was buffered is thrown away before this key is handled.
3. Enter with a non-empty buffer completes a scan: the code is emitted,
   the buffer cleared, and the event's default action suppressed.
4. Any other single printable character is appended to the buffer.

This is a timing heuristic, not a protocol.  A very fast typist or a
slow scanner over a loaded USB hub can fool it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_GAP_THRESHOLD = 0.050  # seconds

ENTER = "Enter"


@dataclass
class KeyEvent:
    """A single key press as delivered by the input surface.

    ``timestamp`` is in seconds from a monotonic clock.
    """

    key: str
    timestamp: float
    in_text_field: bool = False
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1 and self.key.isprintable()


@dataclass(frozen=True)
class ScannedBarcode:
    code: str


class ScanDecoder:
    """Stateful classifier turning key events into ScannedBarcode events."""

    def __init__(self, gap_threshold: float = DEFAULT_GAP_THRESHOLD) -> None:
        if gap_threshold <= 0:
            raise ValueError("gap_threshold must be positive")
        self._gap_threshold = gap_threshold
        self._buffer: list[str] = []
        self._last_event_time: float | None = None

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    def feed(self, event: KeyEvent) -> ScannedBarcode | None:
        if event.in_text_field:
            return None

        if (
            self._last_event_time is not None
            and event.timestamp - self._last_event_time > self._gap_threshold
        ):
            self._buffer.clear()
        self._last_event_time = event.timestamp

        if event.key == ENTER and self._buffer:
            code = self.buffer
            self._buffer.clear()
            event.prevent_default()
            return ScannedBarcode(code)

        if event.is_printable:
            self._buffer.append(event.key)
        return None

    def reset(self) -> None:
        self._buffer.clear()
        self._last_event_time = None
