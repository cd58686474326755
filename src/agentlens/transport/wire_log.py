"""NDJSON wire log: one raw stream message per line.

The capture format is exactly the stream's wire format with one message
per line, so a captured file can be fed back through the same decoder.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from types import TracebackType
from typing import IO

from agentlens.json_text import to_compact_json

logger = logging.getLogger(__name__)


def read_wire_log(path: Path) -> Iterator[str]:
    """Yield every line of a wire log, without line endings (blank lines included)."""
    with path.open(encoding="utf-8") as fh:
        for line in fh:
            yield line.rstrip("\r\n")


async def iter_wire_log(path: Path) -> AsyncIterator[str]:
    """Yield the non-blank lines of a wire log, one message at a time.

    Yields control to the event loop between lines so a large file does
    not starve keyboard input or redraws.
    """
    for line in read_wire_log(path):
        if line.strip():
            yield line
        await asyncio.sleep(0)


def to_wire_line(raw: str) -> str:
    """Encode one raw message as a single NDJSON line (no trailing newline)."""
    compact = to_compact_json(raw)
    if compact is not None:
        return compact
    return raw.replace("\r", "\\r").replace("\n", "\\n")


class WireLogWriter:
    """Append raw stream messages to an NDJSON capture file.

    Each message is flushed as soon as it is written so a crash or
    Ctrl-C loses nothing already received.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._fh: IO[str] | None = None

    def open(self) -> WireLogWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")
        logger.info("Capturing raw events to %s", self.path)
        return self

    def write(self, raw: str) -> None:
        if self._fh is None:
            raise RuntimeError("WireLogWriter.write() called before open()")
        self._fh.write(to_wire_line(raw) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> WireLogWriter:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
