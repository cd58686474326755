"""Event decoder: raw stream text to DebugEvent or DecodeError.

Two-stage decoding: parse the text as JSON, then validate it against the
DebugEvent model. Errors from either stage are turned into DecodeError
values at this boundary, so callers never see an exception for bad input.

The top-level ``kind`` is strict (an unknown kind fails the whole event)
while nested content blocks degrade to ``Unsupported*`` models, see
agentlens.models.events.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import ValidationError

from agentlens.decoding.errors import DecodeError, DecodeFailure, DecodeIssue
from agentlens.models.events import DebugEvent

DecodeResult = DebugEvent | DecodeError


def _loc_to_field_path(loc: tuple[str | int, ...]) -> str:
    """Convert a Pydantic error loc tuple to a dotted field path."""
    return ".".join(str(part) for part in loc)


def _issues_from(exc: ValidationError) -> tuple[DecodeIssue, ...]:
    return tuple(
        DecodeIssue(
            field=_loc_to_field_path(err["loc"]) or "<root>",
            message=err["msg"],
            type=err["type"],
        )
        for err in exc.errors(include_url=False)
    )


def _unknown_kind(exc: ValidationError) -> Any | None:
    """Return the offending tag if the error is an unrecognized payload kind."""
    for err in exc.errors(include_url=False):
        if err["type"] == "union_tag_invalid" and tuple(err["loc"]) == ("payload",):
            return (err.get("ctx") or {}).get("tag")
    return None


def _shape_error(exc: ValidationError, text: str) -> DecodeError:
    issues = _issues_from(exc)
    tag = _unknown_kind(exc)
    if tag is not None:
        return DecodeError(
            reason=DecodeFailure.unknown_kind,
            message=f"unknown payload kind {tag!r}",
            raw=text,
            issues=issues,
        )
    first = issues[0] if issues else None
    message = f"{first.field}: {first.message}" if first else "invalid event shape"
    if len(issues) > 1:
        message += f" (+{len(issues) - 1} more)"
    return DecodeError(
        reason=DecodeFailure.invalid_shape,
        message=message,
        raw=text,
        issues=issues,
    )


def decode_event(raw: str | bytes) -> DecodeResult:
    """Decode one raw stream message into a DebugEvent.

    Args:
        raw: The message text (bytes are decoded as UTF-8).

    Returns:
        The decoded DebugEvent, or a DecodeError describing a JSON syntax
        error, an unknown payload kind, or a missing/mistyped field.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return DecodeError(
            reason=DecodeFailure.syntax,
            message=f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            raw=text,
        )
    except RecursionError:
        return DecodeError(
            reason=DecodeFailure.syntax,
            message="invalid JSON: nested too deeply",
            raw=text,
        )

    try:
        return DebugEvent.model_validate(data)
    except ValidationError as exc:
        return _shape_error(exc, text)
    except RecursionError:
        return DecodeError(
            reason=DecodeFailure.invalid_shape,
            message="<root>: value nested too deeply",
            raw=text,
        )


def decode_lines(lines: Iterable[str]) -> Iterator[tuple[int, DecodeResult]]:
    """Decode NDJSON lines, yielding (1-indexed line number, result).

    Blank lines are skipped but still counted.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield line_number, decode_event(line)
