"""Effect descriptors returned by the update function.

Plain values describing a side effect; the runtime's EffectInterpreter
performs them. Keeping them as data leaves update() pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

EVENT_ELEMENT_PREFIX = "event-"


def event_element_id(index: int) -> str:
    """Element id of the event at a chronological (oldest-first) index.

    Used both when labelling rendered events and when requesting a
    scroll, so the two can never disagree.
    """
    return f"{EVENT_ELEMENT_PREFIX}{index}"


@dataclass(frozen=True)
class NoEffect:
    pass


@dataclass(frozen=True)
class ScrollToBottom:
    pass


@dataclass(frozen=True)
class ScrollToElement:
    element_id: str


@dataclass(frozen=True)
class SubscribeToStream:
    """Subscribe to a push stream (http(s) URL or NDJSON file path)."""

    source: str


Effect = Union[NoEffect, ScrollToBottom, ScrollToElement, SubscribeToStream]

NO_EFFECT = NoEffect()
