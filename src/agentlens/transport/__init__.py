"""Transport subscription: deliver raw stream messages one at a time.

A source is either an http(s) SSE endpoint or a path to an NDJSON wire
log. Either way the callback sees raw message text in arrival order.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from urllib.parse import urlparse

import httpx

from agentlens.models.config import StreamConfig
from agentlens.transport.reconnect import ReconnectPolicy, StreamClosed, is_transient
from agentlens.transport.sse import EventStreamClient, iter_sse_data
from agentlens.transport.wire_log import (
    WireLogWriter,
    iter_wire_log,
    read_wire_log,
    to_wire_line,
)


def is_stream_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def open_source(
    source: str,
    config: StreamConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[str]:
    """Return an async iterator of raw messages for ``source``."""
    if is_stream_url(source):
        config = config or StreamConfig()
        client = EventStreamClient(
            source,
            connect_timeout=config.connect_timeout,
            policy=ReconnectPolicy.from_config(config),
            transport=transport,
        )
        return client.messages()
    return iter_wire_log(Path(source))


async def subscribe(
    source: str,
    on_message: Callable[[str], None],
    config: StreamConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Call ``on_message`` with each raw message from ``source`` until it ends."""
    async for raw in open_source(source, config, transport):
        on_message(raw)


__all__ = [
    "EventStreamClient",
    "ReconnectPolicy",
    "StreamClosed",
    "WireLogWriter",
    "is_stream_url",
    "is_transient",
    "iter_sse_data",
    "iter_wire_log",
    "open_source",
    "read_wire_log",
    "subscribe",
    "to_wire_line",
]
