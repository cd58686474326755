"""Tests for agentlens.runtime.interpreter - performing effect descriptors."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest

from agentlens.app.effects import NO_EFFECT, ScrollToBottom, ScrollToElement, SubscribeToStream
from agentlens.app.messages import EventReceived
from agentlens.decoding import DecodeError
from agentlens.models.events import DebugEvent
from agentlens.runtime.interpreter import EffectInterpreter
from agentlens.runtime.viewport import Viewport
from agentlens.transport import WireLogWriter

GOOD = '{"timestamp":"2024-01-01T00:00:00Z","payload":{"kind":"new_session"}}'
BAD = '{"timestamp":"t","payload":{"kind":"bogus"}}'


def _fake_subscribe(messages: list[str], calls: list | None = None):
    async def subscribe(source, on_message, config, transport):
        if calls is not None:
            calls.append((source, config, transport))
        for raw in messages:
            on_message(raw)

    return subscribe


class _RecordingViewport(Viewport):
    def __init__(self) -> None:
        super().__init__()
        self.requests: list[object] = []

    def scroll_to_bottom(self) -> None:
        self.requests.append("bottom")

    def scroll_to_element(self, element_id: str) -> None:
        self.requests.append(element_id)


class TestPerform:
    """Test EffectInterpreter.perform for scroll effects."""

    def test_no_effect_does_nothing(self):
        viewport = _RecordingViewport()
        EffectInterpreter(viewport).perform(NO_EFFECT, lambda msg: None)
        assert viewport.requests == []

    def test_scroll_effects_reach_viewport(self):
        viewport = _RecordingViewport()
        interpreter = EffectInterpreter(viewport)
        interpreter.perform(ScrollToBottom(), lambda msg: None)
        interpreter.perform(ScrollToElement("event-3"), lambda msg: None)
        assert viewport.requests == ["bottom", "event-3"]


class TestSubscription:
    """Test subscription tasks started by SubscribeToStream."""

    @pytest.mark.asyncio
    async def test_each_message_dispatched_once_in_order(self):
        dispatched = []
        calls: list = []
        interpreter = EffectInterpreter(
            Viewport(), subscribe_fn=_fake_subscribe([GOOD, BAD, GOOD], calls)
        )
        interpreter.perform(SubscribeToStream("capture.ndjson"), dispatched.append)
        await interpreter.wait_for_subscriptions()

        assert [type(msg) for msg in dispatched] == [EventReceived] * 3
        results = [msg.result for msg in dispatched]
        assert isinstance(results[0], DebugEvent)
        assert isinstance(results[1], DecodeError)
        assert isinstance(results[2], DebugEvent)
        assert calls[0][0] == "capture.ndjson"
        assert calls[0][1] is interpreter.stream_config

    @pytest.mark.asyncio
    async def test_deeply_nested_message_does_not_stop_subscription(self, tmp_path: Path):
        deep = "[" * 100000 + "]" * 100000
        dispatched = []
        with WireLogWriter(tmp_path / "capture.ndjson") as writer:
            interpreter = EffectInterpreter(
                Viewport(),
                capture=writer,
                subscribe_fn=_fake_subscribe([GOOD, deep, GOOD]),
            )
            interpreter.perform(SubscribeToStream("x"), dispatched.append)
            await interpreter.wait_for_subscriptions()

        assert [type(msg) for msg in dispatched] == [EventReceived] * 3
        results = [msg.result for msg in dispatched]
        assert isinstance(results[0], DebugEvent)
        assert isinstance(results[1], DecodeError)
        assert isinstance(results[2], DebugEvent)
        assert len((tmp_path / "capture.ndjson").read_text(encoding="utf-8").splitlines()) == 3

    @pytest.mark.asyncio
    async def test_decode_failure_logged_at_debug(self, caplog):
        interpreter = EffectInterpreter(Viewport(), subscribe_fn=_fake_subscribe([BAD]))
        with caplog.at_level(logging.DEBUG, logger="agentlens.runtime.interpreter"):
            interpreter.perform(SubscribeToStream("x"), lambda msg: None)
            await interpreter.wait_for_subscriptions()
        assert "unknown_kind" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_subscription_is_logged_not_raised(self, caplog):
        async def broken(source, on_message, config, transport):
            raise RuntimeError("connection refused")

        interpreter = EffectInterpreter(Viewport(), subscribe_fn=broken)
        with caplog.at_level(logging.ERROR, logger="agentlens.runtime.interpreter"):
            interpreter.perform(SubscribeToStream("http://nowhere"), lambda msg: None)
            await interpreter.wait_for_subscriptions()
        assert "Subscription to http://nowhere failed" in caplog.text

    @pytest.mark.asyncio
    async def test_aclose_cancels_running_subscription(self):
        started = asyncio.Event()

        async def forever(source, on_message, config, transport):
            started.set()
            await asyncio.Event().wait()

        interpreter = EffectInterpreter(Viewport(), subscribe_fn=forever)
        interpreter.perform(SubscribeToStream("http://agent"), lambda msg: None)
        await started.wait()
        assert interpreter.active_subscriptions == 1
        await interpreter.aclose()
        assert interpreter.active_subscriptions == 0

    @pytest.mark.asyncio
    async def test_capture_records_raw_messages(self, tmp_path: Path):
        capture_path = tmp_path / "capture.ndjson"
        pretty = json.dumps(json.loads(GOOD), indent=2)
        with WireLogWriter(capture_path) as writer:
            interpreter = EffectInterpreter(
                Viewport(), capture=writer, subscribe_fn=_fake_subscribe([pretty, "oops"])
            )
            interpreter.perform(SubscribeToStream("x"), lambda msg: None)
            await interpreter.wait_for_subscriptions()

        lines = capture_path.read_text(encoding="utf-8").splitlines()
        assert lines == [GOOD, "oops"]
