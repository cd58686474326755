"""Decode failure values.

A failed decode is returned, not raised: the update loop receives it as
an ordinary message and drops it. Failures keep enough detail (reason,
per-field issues, original text) for the ``check`` command and for
debug logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DecodeFailure(str, Enum):
    """Why a raw message could not be decoded."""

    syntax = "syntax"
    unknown_kind = "unknown_kind"
    invalid_shape = "invalid_shape"


@dataclass(frozen=True)
class DecodeIssue:
    """A single field-level problem found while decoding.

    Attributes:
        field: Dotted path to the offending field (e.g. 'payload.prompt.role').
        message: Human-readable error description.
        type: Pydantic error type string (e.g. 'missing', 'string_type').
    """

    field: str
    message: str
    type: str


@dataclass(frozen=True)
class DecodeError:
    """A raw message that did not decode into a DebugEvent."""

    reason: DecodeFailure
    message: str
    raw: str
    issues: tuple[DecodeIssue, ...] = ()

    def summary(self) -> str:
        """One-line description used in logs and CLI output."""
        return f"{self.reason.value}: {self.message}"
