"""Dashboard configuration model for agentlens.

Captures agentlens.yaml fields with sensible defaults for the stream
endpoint, reconnect behavior, viewport size, and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

CONFIG_FILENAME = "agentlens.yaml"
STATE_DIRNAME = ".agentlens"
DEFAULT_ENDPOINT = "http://127.0.0.1:4880/api/debug/events"


class StreamConfig(BaseModel):
    """Configuration for the debug event stream subscription.

    Controls the endpoint address, connect timeout, and the exponential
    backoff used when the connection drops.
    """

    model_config = {"extra": "forbid"}

    endpoint: str = DEFAULT_ENDPOINT
    connect_timeout: float = Field(default=5.0, gt=0.0)
    reconnect_base_delay: float = Field(default=0.5, ge=0.0)
    reconnect_max_delay: float = Field(default=10.0, ge=0.0)
    max_reconnects: int | None = Field(default=None, ge=0)


class ViewConfig(BaseModel):
    """Configuration for timeline rendering."""

    model_config = {"extra": "forbid"}

    page_size: int = Field(default=10, ge=1, le=200)
    max_payload_lines: int = Field(default=40, ge=1, le=1000)


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging.

    Logs go to stderr unless a file is given; the live dashboard owns
    stdout, so a file is the better choice for DEBUG level.
    """

    model_config = {"extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None


class DashboardConfig(BaseModel):
    """Project-level configuration loaded from agentlens.yaml."""

    model_config = {"extra": "forbid"}

    stream: StreamConfig = Field(default_factory=StreamConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from start (default: cwd) looking for agentlens.yaml or .agentlens/.

    Args:
        start: Starting path (file or directory). Defaults to cwd.

    Returns:
        Path to the directory containing agentlens.yaml or .agentlens/,
        or cwd if neither is found.
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    while current != current.parent:
        if (current / CONFIG_FILENAME).exists() or (current / STATE_DIRNAME).exists():
            return current
        current = current.parent
    return Path.cwd()


def load_config(project_root: Path | None = None) -> DashboardConfig:
    """Load DashboardConfig from agentlens.yaml. Returns defaults if not found.

    Args:
        project_root: Directory holding agentlens.yaml. If None, uses
            find_project_root() to locate it.

    Returns:
        Validated DashboardConfig instance.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If the file does not match the schema.
    """
    if project_root is None:
        project_root = find_project_root()
    config_path = project_root / CONFIG_FILENAME
    if not config_path.exists():
        return DashboardConfig()
    import yaml

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if raw is None:
        return DashboardConfig()
    return DashboardConfig.model_validate(raw)
