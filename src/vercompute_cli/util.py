from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from vercompute_core.config import ConfigLoader, VersionConfig
from vercompute_core.errors import ConfigError

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(verbosity: str) -> None:
    """Route log records to stderr through rich; ``off`` silences them."""
    level = _LEVELS.get(verbosity.strip().lower(), logging.CRITICAL + 1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_config_or_exit(ctx: typer.Context, path: Path) -> VersionConfig:
    """Load the project config, set up logging and exit 1 on a broken config."""
    override: Optional[str] = (ctx.obj or {}).get("verbosity") if ctx is not None else None
    try:
        config = ConfigLoader.load(path.resolve())
    except ConfigError as e:
        configure_logging(override or "info")
        typer.echo(f"ConfigError: {e}", err=True)
        raise typer.Exit(1)
    configure_logging(override or config.log.verbosity)
    return config
