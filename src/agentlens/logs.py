"""Logging setup for the agentlens CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from agentlens.models.config import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """Configure root logging from config.

    Args:
        config: Level and optional log file.
        verbose: Force DEBUG level regardless of config.
    """
    level = logging.DEBUG if verbose else getattr(logging, config.level)
    if config.file:
        path = Path(config.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)
