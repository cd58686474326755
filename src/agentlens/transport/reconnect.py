"""Reconnect policy with exponential backoff and jitter.

A debug stream is long-lived, so instead of retrying a single call we
reconnect whenever the connection drops for a transient reason. The
attempt counter resets once a connection delivers a message.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from agentlens.models.config import StreamConfig


class StreamClosed(Exception):
    """The server ended the event stream."""


# Exception types considered transient (network-level issues)
TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (
    TimeoutError,
    ConnectionError,
    httpx.TransportError,
    StreamClosed,
)

# HTTP status codes considered transient (rate-limit, server errors)
TRANSIENT_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def is_transient(exc: Exception) -> bool:
    """Check if an exception means the stream may come back.

    Matches against known transient exception types, then checks the
    HTTP status of a failed response.
    """
    if isinstance(exc, TRANSIENT_EXCEPTIONS):
        return True

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
    else:
        status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if status is not None and status in TRANSIENT_STATUS_CODES:
        return True

    return False


@dataclass(frozen=True)
class ReconnectPolicy:
    """Backoff settings for re-establishing a dropped stream.

    Attributes:
        base_delay: Initial backoff delay in seconds.
        max_delay: Maximum backoff delay cap in seconds.
        max_reconnects: Consecutive reconnects allowed before giving up,
            or None to keep trying forever.
    """

    base_delay: float = 0.5
    max_delay: float = 10.0
    max_reconnects: int | None = None

    @classmethod
    def from_config(cls, config: StreamConfig) -> ReconnectPolicy:
        return cls(
            base_delay=config.reconnect_base_delay,
            max_delay=config.reconnect_max_delay,
            max_reconnects=config.max_reconnects,
        )

    def exhausted(self, attempt: int) -> bool:
        return self.max_reconnects is not None and attempt >= self.max_reconnects

    def delay(self, attempt: int) -> float:
        """Full-jitter delay before reconnect number ``attempt`` (0-based)."""
        ceiling = min(self.base_delay * (2 ** attempt), self.max_delay)
        return random.uniform(0, ceiling)  # noqa: S311
