"""Event decoding - raw stream text to typed events or decode failures."""

from agentlens.decoding.decoder import DecodeResult, decode_event, decode_lines
from agentlens.decoding.errors import DecodeError, DecodeFailure, DecodeIssue

__all__ = [
    "DecodeError",
    "DecodeFailure",
    "DecodeIssue",
    "DecodeResult",
    "decode_event",
    "decode_lines",
]
