"""Application core: state model, messages, effects, and the update function."""

from agentlens.app.effects import (
    NO_EFFECT,
    Effect,
    NoEffect,
    ScrollToBottom,
    ScrollToElement,
    SubscribeToStream,
    event_element_id,
)
from agentlens.app.messages import EventReceived, Msg, ScrollToEvent, ToggleScrollToNewEvent
from agentlens.app.state import Controls, EventLog, Model
from agentlens.app.update import init, update

__all__ = [
    "NO_EFFECT",
    "Controls",
    "Effect",
    "EventLog",
    "EventReceived",
    "Model",
    "Msg",
    "NoEffect",
    "ScrollToBottom",
    "ScrollToElement",
    "ScrollToEvent",
    "SubscribeToStream",
    "ToggleScrollToNewEvent",
    "event_element_id",
    "init",
    "update",
]
