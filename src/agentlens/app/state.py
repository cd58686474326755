"""Application state: the event log plus UI controls.

The Model is an immutable snapshot. Every transition produces a new
snapshot; older snapshots stay valid and unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from agentlens.models.events import DebugEvent


class EventLog:
    """Append-only event sequence, newest first.

    Iteration yields the newest event first, matching arrival-order
    storage with prepend. Internally events sit in an array in arrival
    order and each snapshot remembers its own length, so ``prepend`` is
    O(1) amortized and shares storage with the snapshot it came from.
    ``chronological()`` is the oldest-first reading order used for
    display.
    """

    __slots__ = ("_buffer", "_length")

    def __init__(self, events: Iterable[DebugEvent] = ()) -> None:
        """Build a log from events given oldest first."""
        self._buffer: list[DebugEvent] = list(events)
        self._length = len(self._buffer)

    @classmethod
    def _snapshot(cls, buffer: list[DebugEvent], length: int) -> EventLog:
        log = cls.__new__(cls)
        log._buffer = buffer
        log._length = length
        return log

    def prepend(self, event: DebugEvent) -> EventLog:
        """Return a new log with ``event`` as the newest entry."""
        buffer = self._buffer
        if len(buffer) != self._length:
            # A later snapshot already extended the shared buffer; branch off.
            buffer = buffer[: self._length]
        buffer.append(event)
        return EventLog._snapshot(buffer, self._length + 1)

    def chronological(self) -> tuple[DebugEvent, ...]:
        """All events, oldest first."""
        return tuple(self._buffer[: self._length])

    def newest(self) -> DebugEvent | None:
        return self._buffer[self._length - 1] if self._length else None

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def __iter__(self) -> Iterator[DebugEvent]:
        for position in range(self._length - 1, -1, -1):
            yield self._buffer[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self.chronological() == other.chronological()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"EventLog(len={self._length})"


@dataclass(frozen=True)
class Controls:
    """User-adjustable display preferences."""

    scroll_to_new_event: bool = False


@dataclass(frozen=True)
class Model:
    """Complete dashboard state owned by the update loop."""

    events: EventLog = field(default_factory=EventLog)
    controls: Controls = field(default_factory=Controls)
