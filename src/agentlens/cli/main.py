"""agentlens CLI entry point."""

import typer

from agentlens import __version__
from agentlens.cli.check_cmd import check
from agentlens.cli.replay_cmd import replay
from agentlens.cli.watch_cmd import watch

app = typer.Typer(
    name="agentlens",
    help="Debug dashboard for streaming AI agent events",
    no_args_is_help=True,
)

# Register subcommands
app.command()(check)
app.command()(replay)
app.command()(watch)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"agentlens {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Debug dashboard for streaming AI agent events."""
