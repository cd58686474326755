"""Pretty-printing helpers for opaque JSON values.

Fields that carry arbitrary JSON (conversation history, tool arguments,
tool results, unsupported content blocks) are never interpreted by the
decoder. They are re-serialized into a stable, indented text form for
display instead.
"""

from __future__ import annotations

import json
from typing import Any

# Matches the indentation used by browser devtools and most debug UIs.
PRETTY_INDENT = 2

_NOT_JSON = object()


def to_pretty_json(value: Any) -> str:
    """Serialize an already-parsed JSON value as indented text.

    Key insertion order is preserved, so identical input always produces
    identical output. Non-ASCII characters are kept as-is.

    Args:
        value: Any value produced by ``json.loads``.

    Returns:
        The pretty-printed JSON text, ``str(value)`` if the value cannot
        be serialized, or a placeholder if it is nested too deeply for
        either.
    """
    try:
        return json.dumps(value, indent=PRETTY_INDENT, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return str(value)
    except RecursionError:
        return f"<{type(value).__name__} nested too deeply to display>"


def _loads(text: str) -> Any:
    """Parse JSON text, returning _NOT_JSON instead of raising."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, RecursionError):
        return _NOT_JSON


def try_pretty_print(text: str) -> str:
    """Pretty-print a string that may itself contain JSON.

    Returns the text unchanged when it is not valid JSON.
    """
    parsed = _loads(text)
    if parsed is _NOT_JSON:
        return text
    return to_pretty_json(parsed)


def to_compact_json(text: str) -> str | None:
    """Re-encode JSON text on a single line, or None if it is not JSON."""
    parsed = _loads(text)
    if parsed is _NOT_JSON:
        return None
    try:
        return json.dumps(parsed, ensure_ascii=False, separators=(",", ":"))
    except RecursionError:
        return None


def unwrap_json_string(text: str) -> str:
    """Display form of pretty JSON text.

    When the text encodes a JSON string whose contents are themselves JSON
    (tool arguments are often sent that way), the inner document is
    pretty-printed instead. Any other text is returned unchanged.
    """
    value = _loads(text)
    if isinstance(value, str) and _loads(value) is not _NOT_JSON:
        return try_pretty_print(value)
    return text
