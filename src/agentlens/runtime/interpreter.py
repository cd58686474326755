"""Effect interpreter: performs the effects returned by update().

Owns everything with side effects: stream subscription tasks, the
optional capture file, and the viewport. Each raw stream message is
decoded here and handed to the update loop as exactly one message.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import assert_never

import httpx

from agentlens.app.effects import (
    Effect,
    NoEffect,
    ScrollToBottom,
    ScrollToElement,
    SubscribeToStream,
)
from agentlens.app.messages import EventReceived, Msg
from agentlens.decoding import DecodeError, decode_event
from agentlens.models.config import StreamConfig
from agentlens.runtime.viewport import Viewport
from agentlens.transport import WireLogWriter, subscribe

logger = logging.getLogger(__name__)

Dispatch = Callable[[Msg], None]
SubscribeFn = Callable[..., Awaitable[None]]


class EffectInterpreter:
    """Execute effect descriptors against the terminal and the network.

    Args:
        viewport: Receives the scroll requests.
        stream_config: Endpoint timeouts and reconnect policy.
        capture: Optional writer that records every raw message.
        transport: Optional httpx transport (tests use MockTransport).
        subscribe_fn: Subscription coroutine, replaceable in tests.
    """

    def __init__(
        self,
        viewport: Viewport,
        *,
        stream_config: StreamConfig | None = None,
        capture: WireLogWriter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        subscribe_fn: SubscribeFn = subscribe,
    ) -> None:
        self.viewport = viewport
        self.stream_config = stream_config or StreamConfig()
        self.capture = capture
        self.transport = transport
        self._subscribe = subscribe_fn
        self._tasks: set[asyncio.Task[None]] = set()

    def perform(self, effect: Effect, dispatch: Dispatch) -> None:
        """Perform one effect. Never blocks; subscriptions run as tasks."""
        if isinstance(effect, NoEffect):
            return
        if isinstance(effect, ScrollToBottom):
            self.viewport.scroll_to_bottom()
            return
        if isinstance(effect, ScrollToElement):
            self.viewport.scroll_to_element(effect.element_id)
            return
        if isinstance(effect, SubscribeToStream):
            self._start_subscription(effect.source, dispatch)
            return
        assert_never(effect)

    def receive(self, raw: str, dispatch: Dispatch) -> None:
        """Decode one raw message and dispatch it as EventReceived."""
        if self.capture is not None:
            self.capture.write(raw)
        result = decode_event(raw)
        if isinstance(result, DecodeError):
            logger.debug("Dropping undecodable event (%s)", result.summary())
        dispatch(EventReceived(result))

    def _start_subscription(self, source: str, dispatch: Dispatch) -> None:
        async def run() -> None:
            logger.info("Subscribing to %s", source)
            try:
                await self._subscribe(
                    source,
                    lambda raw: self.receive(raw, dispatch),
                    self.stream_config,
                    self.transport,
                )
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Subscription to %s failed", source)
            else:
                logger.info("Subscription to %s ended", source)

        task = asyncio.get_running_loop().create_task(run(), name=f"subscribe:{source}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @property
    def active_subscriptions(self) -> int:
        return len(self._tasks)

    async def wait_for_subscriptions(self) -> None:
        """Wait until every subscription has ended (finite sources only)."""
        if self._tasks:
            await asyncio.gather(*self._tasks)

    async def aclose(self) -> None:
        """Cancel running subscriptions."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
