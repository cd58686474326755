"""Timeline rendering - Model to rich renderables."""

from agentlens.view.timeline import (
    KIND_COLORS,
    EventBlock,
    Screen,
    format_timestamp,
    payload_kind_and_color,
    render,
    render_event,
    render_payload,
)

__all__ = [
    "KIND_COLORS",
    "EventBlock",
    "Screen",
    "format_timestamp",
    "payload_kind_and_color",
    "render",
    "render_event",
    "render_payload",
]
