"""agentlens watch -- attach to an agent's debug stream and show it live.

Subscribes to the SSE endpoint (or an NDJSON capture), renders the
timeline with rich Live, and reads keyboard commands from stdin until
the user quits or presses Ctrl-C.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from agentlens.cli.common import load_config_or_exit
from agentlens.runtime.terminal import run_live_dashboard
from agentlens.transport import WireLogWriter

console = Console()


def watch(
    source: Optional[str] = typer.Argument(
        None, help="Stream URL or NDJSON capture file (default: configured endpoint)"
    ),
    follow: bool = typer.Option(False, "--follow", "-f", help="Scroll to each new event"),
    capture: Optional[Path] = typer.Option(
        None, "--capture", help="Append every raw message to this NDJSON file"
    ),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", min=1, max=200, help="Events shown per page"
    ),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
) -> None:
    """Watch an agent's debug event stream live."""
    config = load_config_or_exit(console, verbose=verbose)
    if page_size is not None:
        config.view.page_size = page_size
    target = source or config.stream.endpoint

    writer = WireLogWriter(capture) if capture is not None else None
    try:
        if writer is not None:
            writer.open()
        model = asyncio.run(
            run_live_dashboard(
                target,
                config,
                console=console,
                follow=follow,
                capture=writer,
            )
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        return
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    finally:
        if writer is not None:
            writer.close()

    console.print(f"[dim]{len(model.events)} event(s) received.[/dim]")
