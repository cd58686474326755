"""agentlens replay -- render a captured NDJSON wire log without a server.

Folds every decodable line through the same update function the live
dashboard uses, then prints the resulting timeline in one pass.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from agentlens.app.messages import EventReceived
from agentlens.app.state import Model
from agentlens.app.update import update
from agentlens.cli.common import load_config_or_exit
from agentlens.cli.output import print_timeline, render_kind_summary
from agentlens.decoding import DecodeError, decode_lines
from agentlens.transport import read_wire_log
from agentlens.view.timeline import render


def replay(
    file: Path = typer.Argument(..., help="NDJSON capture file to replay"),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print per-kind counts"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
) -> None:
    """Replay a captured event stream as a static timeline."""
    console = Console()
    config = load_config_or_exit(console, verbose=verbose)

    if not file.is_file():
        console.print(f"[bold red]Error:[/bold red] File not found: {file}")
        raise typer.Exit(code=1)

    console.print("\n[bold cyan]══════════ [REPLAY] ══════════[/bold cyan]\n")

    model = Model()
    skipped = 0
    try:
        for _line_number, result in decode_lines(read_wire_log(file)):
            if isinstance(result, DecodeError):
                skipped += 1
            model, _effect = update(model, EventReceived(result))
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[bold red]Error:[/bold red] Cannot read {file}: {exc}")
        raise typer.Exit(code=1)

    screen = render(model, max_payload_lines=config.view.max_payload_lines)
    print_timeline(screen, console)

    if summary and screen.blocks:
        render_kind_summary(screen, console)
    if skipped:
        console.print(
            f"[dim]skipped {skipped} undecodable line(s); "
            f"run `agentlens check {file}` for details[/dim]"
        )
