"""Rich terminal output for non-interactive commands.

Prints a whole timeline at once (replay) and the per-kind summary table.
"""

from __future__ import annotations

from collections import Counter

from rich import box
from rich.console import Console
from rich.table import Table

from agentlens.models.events import PAYLOAD_KINDS
from agentlens.view.timeline import KIND_COLORS, Screen


def render_kind_summary(screen: Screen, console: Console) -> None:
    """Render a compact table of event counts per payload kind.

    Kinds are listed in their fixed declaration order; kinds that never
    occurred are omitted.
    """
    counts: Counter[str] = Counter(block.kind for block in screen.blocks)

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Kind", style="bold")
    table.add_column("Count", justify="right")

    for kind in PAYLOAD_KINDS:
        if counts[kind]:
            color = KIND_COLORS[kind]
            table.add_row(f"[{color}]{kind}[/{color}]", str(counts[kind]))

    console.print()
    console.print(table)


def print_timeline(screen: Screen, console: Console) -> None:
    """Print every event block in chronological order, then the minimap."""
    console.print(screen.header)
    console.print(f"[bold]{screen.count_text}[/bold]")
    console.print(screen.minimap)
    console.print()
    for block in screen.blocks:
        console.print(block.renderable)
