"""Messages: the closed set of inputs to the update function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from agentlens.decoding.decoder import DecodeResult


@dataclass(frozen=True)
class EventReceived:
    """A stream message arrived and was decoded (successfully or not)."""

    result: DecodeResult


@dataclass(frozen=True)
class ToggleScrollToNewEvent:
    """Flip the auto-scroll-on-new-event preference."""


@dataclass(frozen=True)
class ScrollToEvent:
    """Scroll to the event at a chronological (oldest-first) index."""

    index: int


Msg = Union[EventReceived, ToggleScrollToNewEvent, ScrollToEvent]
