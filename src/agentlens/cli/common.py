"""Shared CLI helpers: config loading with user-facing errors."""

from __future__ import annotations

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from agentlens.logs import configure_logging
from agentlens.models.config import CONFIG_FILENAME, DashboardConfig, find_project_root, load_config


def load_config_or_exit(console: Console, verbose: bool = False) -> DashboardConfig:
    """Load agentlens.yaml and configure logging, exiting 1 on a bad file."""
    project_root = find_project_root()
    try:
        config = load_config(project_root)
    except yaml.YAMLError as exc:
        console.print(
            f"[bold red]Error:[/bold red] {project_root / CONFIG_FILENAME} is not valid YAML: {exc}"
        )
        raise typer.Exit(code=1)
    except ValidationError as exc:
        console.print(
            f"[bold red]Error:[/bold red] Invalid {CONFIG_FILENAME} "
            f"({exc.error_count()} error(s)):"
        )
        for err in exc.errors(include_url=False):
            loc = ".".join(str(part) for part in err["loc"])
            console.print(f"  {loc}: {err['msg']}")
        raise typer.Exit(code=1)

    configure_logging(config.logging, verbose=verbose)
    return config
