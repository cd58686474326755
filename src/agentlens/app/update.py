"""The update function: (Model, Msg) -> (Model, Effect).

Pure and total. Every message has a defined transition and nothing here
performs I/O; side effects are returned as descriptors.
"""

from __future__ import annotations

from dataclasses import replace
from typing import assert_never

from agentlens.app.effects import (
    NO_EFFECT,
    Effect,
    ScrollToBottom,
    ScrollToElement,
    SubscribeToStream,
    event_element_id,
)
from agentlens.app.messages import EventReceived, Msg, ScrollToEvent, ToggleScrollToNewEvent
from agentlens.app.state import Model
from agentlens.decoding.errors import DecodeError


def init(source: str) -> tuple[Model, Effect]:
    """Initial state: empty log, auto-scroll off, subscribe to ``source``."""
    return Model(), SubscribeToStream(source)


def update(model: Model, msg: Msg) -> tuple[Model, Effect]:
    """Apply one message to the model.

    Args:
        model: Current state snapshot (never mutated).
        msg: The incoming message.

    Returns:
        Tuple of (new model, effect descriptor).
    """
    if isinstance(msg, EventReceived):
        if isinstance(msg.result, DecodeError):
            # Undecodable events are dropped from the log.
            return model, NO_EFFECT
        new_model = replace(model, events=model.events.prepend(msg.result))
        effect: Effect = ScrollToBottom() if model.controls.scroll_to_new_event else NO_EFFECT
        return new_model, effect

    if isinstance(msg, ToggleScrollToNewEvent):
        controls = replace(
            model.controls,
            scroll_to_new_event=not model.controls.scroll_to_new_event,
        )
        return replace(model, controls=controls), NO_EFFECT

    if isinstance(msg, ScrollToEvent):
        return model, ScrollToElement(event_element_id(msg.index))

    assert_never(msg)
