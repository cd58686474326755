"""Decode failure formatter with dual-mode output (rich human and CI concise).

Produces annotated, compiler-style reports in human mode and concise
file:line -- message lines in CI mode.
"""

from __future__ import annotations

import os

from agentlens.decoding.errors import DecodeError, DecodeFailure

# Map decode failure reasons to error codes
ERROR_CODES: dict[DecodeFailure, str] = {
    DecodeFailure.syntax: "E101",
    DecodeFailure.unknown_kind: "E102",
    DecodeFailure.invalid_shape: "E103",
}

# Human-readable descriptions for error codes
ERROR_DESCRIPTIONS: dict[str, str] = {
    "E101": "JSON syntax error",
    "E102": "unknown payload kind",
    "E103": "event shape mismatch",
}

# Longest excerpt of the offending line shown in human mode.
SNIPPET_WIDTH = 100


class DecodeErrorFormatter:
    """Formats decode failures for human or CI consumption.

    Args:
        ci_mode: If True, use CI-friendly concise output. If None,
            auto-detect from the CI environment variable.
    """

    def __init__(self, ci_mode: bool | None = None) -> None:
        if ci_mode is None:
            self.ci_mode = os.environ.get("CI", "").lower() in ("true", "1", "yes")
        else:
            self.ci_mode = ci_mode

    def format_error(self, error: DecodeError, filename: str, line: int) -> str:
        """Format a single failure for display."""
        if self.ci_mode:
            return self._format_ci(error, filename, line)
        return self._format_rich(error, filename, line)

    def _format_ci(self, error: DecodeError, filename: str, line: int) -> str:
        """Format: filename:line -- reason: message"""
        return f"{filename}:{line} -- {error.summary()}"

    def _format_rich(self, error: DecodeError, filename: str, line: int) -> str:
        """Format a failure with the source excerpt and per-field notes.

        Produces output like:
            error[E102]: unknown payload kind
              --> capture.ndjson:3
               |
             3 | {"timestamp":"t","payload":{"kind":"bogus"}}
               |
               = unknown payload kind 'bogus'
        """
        code = ERROR_CODES[error.reason]
        lines = [f"error[{code}]: {ERROR_DESCRIPTIONS[code]}"]
        lines.append(f"  --> {filename}:{line}")
        lines.append("   |")

        snippet = error.raw.strip().splitlines()[0] if error.raw.strip() else ""
        if len(snippet) > SNIPPET_WIDTH:
            snippet = snippet[:SNIPPET_WIDTH] + "..."
        lines.append(f" {line} | {snippet}")
        lines.append("   |")

        lines.append(f"   = {error.message}")
        for issue in error.issues:
            lines.append(f"   = {issue.field}: {issue.message} [{issue.type}]")

        return "\n".join(lines)

    def format_success(self, filename: str, count: int) -> str:
        """Success line for a file whose every line decoded."""
        return f"  {filename} ... {count} event(s) ok"
