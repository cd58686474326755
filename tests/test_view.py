"""Tests for agentlens.view.timeline - Model to Screen rendering."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from agentlens.app.messages import EventReceived, ToggleScrollToNewEvent
from agentlens.app.state import Controls, Model
from agentlens.app.update import update
from agentlens.models.events import (
    PAYLOAD_KINDS,
    AssistantMessage,
    AssistantText,
    AssistantTextEvent,
    DebugEvent,
    Interrupted,
    LlmRequest,
    NewSession,
    Reasoning,
    ReasoningEvent,
    StreamComplete,
    ToolCall,
    ToolCallEvent,
    ToolFunction,
    ToolResultEvent,
    TurnComplete,
    UnsupportedAssistantContent,
    UnsupportedUserContent,
    UserMessage,
    UserText,
    UserToolResult,
)
from agentlens.view.timeline import (
    KIND_COLORS,
    MINIMAP_MARKER,
    count_text,
    format_timestamp,
    render,
    render_control_bar,
    render_payload,
)


def _plain(renderable) -> str:
    """Render to plain text at a fixed width."""
    buffer = io.StringIO()
    Console(file=buffer, width=100, color_system=None).print(renderable)
    return buffer.getvalue()


def _model(payloads) -> Model:
    model = Model()
    for n, payload in enumerate(payloads):
        event = DebugEvent(timestamp=f"2024-05-01T10:00:{n:02d}.123Z", payload=payload)
        model, _ = update(model, EventReceived(event))
    return model


TOOL_CALL = ToolCall(id="tc_1", function=ToolFunction(name="list_files", arguments={"path": "."}))

ALL_PAYLOADS = [
    LlmRequest(
        prompt=UserMessage(
            content=(
                UserText(text="show me"),
                UserToolResult(id="tc_0", content={"ok": True}),
                UnsupportedUserContent(raw='{"type": "image"}'),
            )
        ),
        history=[],
    ),
    AssistantTextEvent(text="Sure thing"),
    ToolCallEvent(tool_call=TOOL_CALL),
    ReasoningEvent(reasoning=Reasoning(reasoning=("first", "second"))),
    ToolResultEvent(id="tc_1", content={"files": ["a.txt"]}),
    StreamComplete(),
    TurnComplete(history=[{"role": "user"}]),
    Interrupted(),
    NewSession(),
]


class TestFormatTimestamp:
    """Test format_timestamp reduction to HH:MM:SS."""

    def test_strips_date_zone_and_fraction(self):
        assert format_timestamp("2024-01-01T12:34:56.789Z") == "12:34:56"

    def test_without_fraction(self):
        assert format_timestamp("2024-01-01T00:00:00Z") == "00:00:00"

    def test_no_separator_unchanged(self):
        assert format_timestamp("yesterday") == "yesterday"

    def test_two_separators_unchanged(self):
        assert format_timestamp("aTbTc") == "aTbTc"


class TestColors:
    def test_every_kind_has_a_distinct_color(self):
        assert set(KIND_COLORS) == set(PAYLOAD_KINDS)
        assert len(set(KIND_COLORS.values())) == len(KIND_COLORS)


class TestRender:
    """Test the full render pass."""

    def test_empty_model(self):
        screen = render(Model())
        assert screen.count_text == "No events"
        assert screen.blocks == ()
        assert screen.minimap.plain == ""

    def test_count_text(self):
        assert count_text(0) == "No events"
        assert count_text(3) == "Events: 3"

    @pytest.mark.parametrize("n", [1, 2, 5, 12])
    def test_kth_received_event_has_index_k_minus_one(self, n):
        """The index depends only on arrival position, not on log length."""
        events = [
            DebugEvent(timestamp=f"t{k}", payload=AssistantTextEvent(text=f"chunk {k}"))
            for k in range(1, n + 1)
        ]
        model = Model()
        for event in events:
            model, _ = update(model, EventReceived(event))
        screen = render(model)
        for k in range(1, n + 1):
            block = screen.blocks[k - 1]
            assert block.index == k - 1
            assert block.element_id == f"event-{k - 1}"
            assert screen.index_of(f"event-{k - 1}") == k - 1
        assert f"chunk {n}" in _plain(screen.blocks[-1].renderable)

    def test_minimap_matches_blocks(self):
        model = _model([NewSession(), AssistantTextEvent(text="x"), Interrupted()])
        screen = render(model)
        assert screen.minimap.plain == MINIMAP_MARKER * 3
        styles = [str(span.style) for span in screen.minimap.spans]
        assert styles == [block.color for block in screen.blocks]
        assert styles == [KIND_COLORS["new_session"], KIND_COLORS["assistant_text"], KIND_COLORS["interrupted"]]

    def test_every_payload_kind_renders(self):
        screen = render(_model(ALL_PAYLOADS))
        assert [block.kind for block in screen.blocks] == list(PAYLOAD_KINDS)
        text = "\n".join(_plain(block.renderable) for block in screen.blocks)
        for expected in ("show me", "Sure thing", "list_files", "first second", "a.txt",
                         "Stream complete", "Turn complete", "User interrupted", "New Session"):
            assert expected in text

    def test_block_shows_number_and_time(self):
        screen = render(_model([NewSession(), NewSession()]))
        assert "#2  10:00:01" in _plain(screen.blocks[1].renderable)

    def test_unknown_index_lookup(self):
        assert render(Model()).index_of("event-0") is None

    def test_header(self):
        assert render(Model()).header.plain == "agentlens [debug]"


class TestRenderPayload:
    """Test render_payload details."""

    def test_assistant_message_lists_blocks(self):
        payload = LlmRequest(
            prompt=AssistantMessage(
                id="msg_7",
                content=(
                    AssistantText(text="hello"),
                    TOOL_CALL,
                    Reasoning(reasoning=("thinking",)),
                    UnsupportedAssistantContent(raw='{"odd": true}'),
                ),
            ),
            history=[],
        )
        text = _plain(render_payload(payload))
        assert "assistant (msg_7)" in text
        assert "hello" in text
        assert "Reasoning:" in text
        assert '"odd": true' in text

    def test_long_payload_is_clipped(self):
        payload = ToolResultEvent(id="x", content={f"k{i}": i for i in range(50)})
        text = _plain(render_payload(payload, max_lines=5))
        assert "more line(s)" in text
        assert "k40" not in text

    def test_string_arguments_are_unwrapped(self):
        call = ToolCall(id="t", function=ToolFunction(name="f", arguments='{"deep": {"a": 1}}'))
        text = _plain(render_payload(ToolCallEvent(tool_call=call)))
        assert '"deep": {' in text


class TestControlBar:
    def test_unchecked_by_default(self):
        assert "[ ] scroll to new event" in render_control_bar(Controls()).plain

    def test_checked_after_toggle(self):
        model, _ = update(Model(), ToggleScrollToNewEvent())
        assert "[x] scroll to new event" in render(model).control_bar.plain
