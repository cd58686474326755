"""Server-Sent Events client for the agent's debug endpoint.

Yields the ``data`` of each SSE message as raw text. Framing follows the
EventSource rules the endpoint relies on: ``data:`` lines accumulate,
a blank line dispatches, comment lines and other fields are ignored.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from contextlib import aclosing

import httpx

from agentlens.transport.reconnect import ReconnectPolicy, StreamClosed, is_transient

logger = logging.getLogger(__name__)

SSE_HEADERS = {"Accept": "text/event-stream", "Cache-Control": "no-cache"}


async def iter_sse_data(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """Group SSE lines into messages and yield each message's data.

    Multi-line ``data`` fields are joined with newlines. A message left
    unterminated when the stream ends is discarded.
    """
    data: list[str] = []
    async for line in lines:
        line = line.rstrip("\r")
        if not line:
            if data:
                yield "\n".join(data)
                data = []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "data":
            data.append(value)


class EventStreamClient:
    """Persistent SSE subscription with automatic reconnect.

    Designed to be mockable in tests via an httpx transport override.

    Args:
        url: The event stream endpoint.
        connect_timeout: Seconds allowed to establish a connection. Reads
            never time out; the stream can be idle for long periods.
        policy: Backoff settings used when the connection drops.
        transport: Optional httpx transport (tests use MockTransport).
        sleep: Awaitable sleep function, replaceable in tests.
    """

    def __init__(
        self,
        url: str,
        *,
        connect_timeout: float = 5.0,
        policy: ReconnectPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.url = url
        self.connect_timeout = connect_timeout
        self.policy = policy or ReconnectPolicy()
        self.transport = transport
        self._sleep = sleep

    def _client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self.connect_timeout, read=None)
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)

    async def _stream_once(self, client: httpx.AsyncClient) -> AsyncIterator[str]:
        async with client.stream("GET", self.url, headers=SSE_HEADERS) as response:
            response.raise_for_status()
            logger.info("Subscribed to %s", self.url)
            async for data in iter_sse_data(response.aiter_lines()):
                yield data

    async def messages(self) -> AsyncIterator[str]:
        """Yield raw message text forever, reconnecting on transient errors.

        Raises:
            Exception: A non-transient error (e.g. HTTP 404), or the last
                transient error once the reconnect limit is reached.
        """
        attempt = 0
        async with self._client() as client:
            while True:
                try:
                    async with aclosing(self._stream_once(client)) as stream:
                        async for data in stream:
                            attempt = 0
                            yield data
                    raise StreamClosed(f"server closed the stream at {self.url}")
                except Exception as exc:
                    if not is_transient(exc) or self.policy.exhausted(attempt):
                        raise
                    delay = self.policy.delay(attempt)
                    attempt += 1
                    logger.warning(
                        "Stream %s interrupted (%s); reconnect %d in %.2fs",
                        self.url,
                        type(exc).__name__,
                        attempt,
                        delay,
                    )
                    await self._sleep(delay)
