from __future__ import annotations

import json
from pathlib import Path

import typer

from vercompute_core.config import ConfigLoader
from vercompute_core.errors import ConfigError

app = typer.Typer(help="Configuration inspection and validation")


@app.command("show")
def config_show(
    path: Path = typer.Option(Path("."), "--path", help="Project root to resolve config from"),
):
    """Print the effective config as JSON."""
    root = path.resolve()
    try:
        config_path, _ = ConfigLoader.find_config(root)
        config = ConfigLoader.load(root)
    except ConfigError as e:
        typer.echo(f"ConfigError: {e}")
        raise typer.Exit(1)

    typer.echo(
        json.dumps(
            {"path": str(config_path) if config_path else None, "config": config.model_dump()},
            indent=2,
        )
    )


@app.command("validate")
def config_validate(
    path: Path = typer.Option(Path("."), "--path", help="Project root to resolve config from"),
):
    """Validate the config; exit 0 if ok, 1 otherwise."""
    try:
        ConfigLoader.load(path.resolve())
    except ConfigError as e:
        typer.echo("Validation failed:")
        typer.echo(f"- {e}")
        raise typer.Exit(1)

    typer.echo("Config is valid")
