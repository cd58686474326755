"""Timeline view: a pure function from Model to a renderable Screen.

The log is shown oldest first. Each event block is tagged with the
element id ``event-{i}`` where ``i`` is its zero-based position in that
chronological order; the minimap is built from the same block sequence,
so a marker and the block it points at always share an index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.syntax import Syntax
from rich.text import Text

from agentlens.app.effects import event_element_id
from agentlens.app.state import Controls, Model
from agentlens.json_text import unwrap_json_string
from agentlens.models.events import (
    AssistantContent,
    AssistantMessage,
    AssistantText,
    AssistantTextEvent,
    DebugEvent,
    DebugEventPayload,
    Interrupted,
    LlmRequest,
    Message,
    NewSession,
    Reasoning,
    ReasoningEvent,
    StreamComplete,
    ToolCall,
    ToolCallEvent,
    ToolResultEvent,
    TurnComplete,
    UnsupportedAssistantContent,
    UnsupportedUserContent,
    UserContent,
    UserText,
    UserToolResult,
)

# Payload kind -> block color (gruvbox palette). One color per kind.
KIND_COLORS: dict[str, str] = {
    "llm_request": "#fe8019",
    "assistant_text": "#fbf1c7",
    "tool_call": "#d3869b",
    "reasoning": "#8ec07c",
    "tool_result": "#b8bb26",
    "stream_complete": "#fabd2f",
    "turn_complete": "#83a598",
    "interrupted": "#fb4934",
    "new_session": "#bdae93",
}

MUTED = "#a89984"
ASSISTANT_BG = "#b16286"
TITLE_COLOR = "#d3869b"
MINIMAP_MARKER = "█"
KEY_HELP = "f follow · g N jump · n/p page · b bottom · q quit"


@dataclass(frozen=True)
class EventBlock:
    """One rendered event, addressable by its element id."""

    element_id: str
    index: int
    kind: str
    color: str
    renderable: RenderableType


@dataclass(frozen=True)
class Screen:
    """The full UI tree for one render pass."""

    header: RenderableType
    count_text: str
    blocks: tuple[EventBlock, ...]
    minimap: Text
    control_bar: Text

    def index_of(self, element_id: str) -> int | None:
        for block in self.blocks:
            if block.element_id == element_id:
                return block.index
        return None


def payload_kind_and_color(payload: DebugEventPayload) -> tuple[str, str]:
    return payload.kind, KIND_COLORS[payload.kind]


def format_timestamp(timestamp: str) -> str:
    """Reduce an ISO-8601 timestamp to its HH:MM:SS part.

    Returns the input unchanged unless it has exactly one 'T' separator.
    """
    parts = timestamp.split("T")
    if len(parts) != 2:
        return timestamp
    time_part = parts[1].replace("Z", "")
    return time_part.split(".")[0]


def _clip(text: str, max_lines: int) -> str:
    lines = text.splitlines()
    if len(lines) <= max_lines:
        return text
    hidden = len(lines) - max_lines
    return "\n".join(lines[:max_lines]) + f"\n… {hidden} more line(s)"


def _raw_block(text: str, max_lines: int) -> Syntax:
    return Syntax(
        _clip(unwrap_json_string(text), max_lines), "json", theme="ansi_dark", word_wrap=True
    )


def _label(text: str, style: str = MUTED) -> Text:
    return Text(text, style=style)


# -- Message content --


def _render_user_content(content: UserContent, max_lines: int) -> RenderableType:
    if isinstance(content, UserText):
        return Text(content.text)
    if isinstance(content, UserToolResult):
        return Group(
            _label(f"tool_result: {content.id}", "bold"),
            _raw_block(content.content, max_lines),
        )
    if isinstance(content, UnsupportedUserContent):
        return _raw_block(content.raw, max_lines)
    assert_never(content)


def _render_tool_call(tool_call: ToolCall, max_lines: int) -> RenderableType:
    heading = Text.assemble(
        (tool_call.function.name, "bold"),
        "  ",
        (f"id: {tool_call.id}", MUTED),
    )
    return Group(heading, _raw_block(tool_call.function.arguments, max_lines))


def _render_assistant_content(content: AssistantContent, max_lines: int) -> RenderableType:
    if isinstance(content, AssistantText):
        return Text(content.text)
    if isinstance(content, ToolCall):
        return _render_tool_call(content, max_lines)
    if isinstance(content, Reasoning):
        return Text.assemble(("Reasoning: ", "bold italic"), (" ".join(content.reasoning), "italic"))
    if isinstance(content, UnsupportedAssistantContent):
        return _raw_block(content.raw, max_lines)
    assert_never(content)


def _render_message(message: Message, max_lines: int) -> RenderableType:
    if isinstance(message, AssistantMessage):
        title = f"assistant ({message.id})" if message.id is not None else "assistant"
        items = [_render_assistant_content(c, max_lines) for c in message.content]
        return Panel(Group(*items), title=title, title_align="left", border_style=ASSISTANT_BG)
    items = [_render_user_content(c, max_lines) for c in message.content]
    return Panel(Group(*items), title="user", title_align="left", border_style=MUTED)


def _render_history(history: str, max_lines: int) -> RenderableType:
    return Group(_label("History", f"bold {MUTED}"), _raw_block(history, max_lines))


# -- Payloads --


def render_payload(payload: DebugEventPayload, max_lines: int = 40) -> RenderableType:
    """Render the body of one event."""
    if isinstance(payload, LlmRequest):
        return Group(_render_message(payload.prompt, max_lines), _render_history(payload.history, max_lines))
    if isinstance(payload, AssistantTextEvent):
        return Text(payload.text)
    if isinstance(payload, ToolCallEvent):
        return _render_tool_call(payload.tool_call, max_lines)
    if isinstance(payload, ReasoningEvent):
        return Text(" ".join(payload.reasoning.reasoning), style="italic")
    if isinstance(payload, ToolResultEvent):
        return Group(_label(f"id: {payload.id}"), _raw_block(payload.content, max_lines))
    if isinstance(payload, StreamComplete):
        return _label("Stream complete")
    if isinstance(payload, TurnComplete):
        return Group(_label("Turn complete"), _render_history(payload.history, max_lines))
    if isinstance(payload, Interrupted):
        return _label("User interrupted", KIND_COLORS["interrupted"])
    if isinstance(payload, NewSession):
        return Rule("New Session", style=MUTED)
    assert_never(payload)


def render_event(event: DebugEvent, index: int, max_lines: int = 40) -> EventBlock:
    """Render one event at a chronological index."""
    kind, color = payload_kind_and_color(event.payload)
    panel = Panel(
        render_payload(event.payload, max_lines),
        title=Text(kind, style=f"bold {color}"),
        title_align="left",
        subtitle=Text(f"#{index + 1}  {format_timestamp(event.timestamp)}", style=MUTED),
        subtitle_align="right",
        border_style=color,
        box=box.ROUNDED,
    )
    return EventBlock(
        element_id=event_element_id(index),
        index=index,
        kind=kind,
        color=color,
        renderable=panel,
    )


def render_minimap(blocks: tuple[EventBlock, ...]) -> Text:
    """One colored marker per event, in the same order as the blocks."""
    minimap = Text()
    for block in blocks:
        minimap.append(MINIMAP_MARKER, style=block.color)
    return minimap


def render_control_bar(controls: Controls) -> Text:
    check = "x" if controls.scroll_to_new_event else " "
    return Text.assemble(
        (f"[{check}] scroll to new event", "bold" if controls.scroll_to_new_event else MUTED),
        "   ",
        (KEY_HELP, MUTED),
    )


def count_text(count: int) -> str:
    return "No events" if count == 0 else f"Events: {count}"


def render(model: Model, max_payload_lines: int = 40) -> Screen:
    """Render the whole dashboard for a model snapshot."""
    events = model.events.chronological()
    blocks = tuple(
        render_event(event, index, max_payload_lines) for index, event in enumerate(events)
    )
    header = Text.assemble(
        ("agentlens", f"bold {TITLE_COLOR}"),
        (" [debug]", MUTED),
    )
    return Screen(
        header=header,
        count_text=count_text(len(events)),
        blocks=blocks,
        minimap=render_minimap(blocks),
        control_bar=render_control_bar(model.controls),
    )
