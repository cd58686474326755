"""agentlens check -- validate captured wire logs line by line.

Reports every line that fails to decode, with rich or CI-friendly
formatting. Exits non-zero when any file has a bad line.
"""

from __future__ import annotations

from pathlib import Path

import typer

from agentlens.cli.errors import DecodeErrorFormatter
from agentlens.decoding import DecodeError, decode_lines
from agentlens.transport import read_wire_log


def check(
    files: list[str] = typer.Argument(..., help="NDJSON capture files to check"),
    ci: bool = typer.Option(
        False, "--ci", help="CI-friendly concise output (default when CI is set)"
    ),
) -> None:
    """Check that every line of each capture decodes to a known event.

    Missing or unreadable files are reported and counted as failures; the
    remaining files are still checked.

    Exits with code 0 if all lines decode, 1 if any line fails.
    """
    # Without --ci, fall back to detecting the CI environment variable.
    formatter = DecodeErrorFormatter(ci_mode=True if ci else None)

    clean = 0
    failed_lines = 0
    for name in files:
        path = Path(name)
        decoded = 0
        failures = 0
        if not path.is_file():
            typer.echo(f"Error: File not found: {name}", err=True)
            failures += 1
        else:
            try:
                for line_number, result in decode_lines(read_wire_log(path)):
                    if isinstance(result, DecodeError):
                        failures += 1
                        typer.echo(
                            formatter.format_error(result, str(path), line_number),
                            err=not formatter.ci_mode,
                        )
                    else:
                        decoded += 1
            except (OSError, UnicodeDecodeError) as exc:
                typer.echo(f"Error: Cannot read {path}: {exc}", err=True)
                failures += 1
        if failures:
            failed_lines += failures
        else:
            clean += 1
            typer.echo(formatter.format_success(str(path), decoded))

    typer.echo(f"\n{clean}/{len(files)} files clean")

    if failed_lines:
        typer.echo(f"{failed_lines} line(s) failed to decode")
        raise typer.Exit(code=1)
