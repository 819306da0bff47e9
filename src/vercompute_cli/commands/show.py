from __future__ import annotations

import json
from pathlib import Path

import typer

from vercompute_core.parser import split_version
from vercompute_ops.resolve import resolve_version

from ..util import load_config_or_exit


def _env_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def show(
    ctx: typer.Context,
    path: Path = typer.Option(Path("."), "--path", help="Project root to resolve the version for"),
    output_format: str = typer.Option("text", "--format", help="Output format: text|json|env"),
):
    """Print the resolved project version."""
    config = load_config_or_exit(ctx, path)
    resolved = resolve_version(path, config=config)

    if output_format == "json":
        typer.echo(json.dumps(resolved.to_dict(), indent=2))
        return
    if output_format == "env":
        typer.echo(f"VERSION={resolved.raw}")
        typer.echo(f"VERSION_MAJOR={_env_value(resolved.major)}")
        typer.echo(f"VERSION_MINOR={_env_value(resolved.minor)}")
        typer.echo(f"VERSION_PATCH={_env_value(resolved.patch)}")
        typer.echo(f"VERSION_STABLE={_env_value(resolved.stable)}")
        return
    if output_format != "text":
        typer.echo(f"Unknown format: {output_format}", err=True)
        raise typer.Exit(2)
    typer.echo(resolved.raw)


def split(
    raw: str = typer.Argument(..., help="Version string, e.g. 0.5-2-034f or 1.2.3"),
    output_format: str = typer.Option("text", "--format", help="Output format: text|json"),
):
    """Split a version string into major, minor and patch."""
    components = split_version(raw)
    if output_format == "json":
        typer.echo(json.dumps(components._asdict(), indent=2))
        return
    for name, value in components._asdict().items():
        typer.echo(f"{name}={_env_value(value)}")
