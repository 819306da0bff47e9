from __future__ import annotations

from pathlib import Path

import typer

from vercompute_ops.resolve import resolve_version
from vercompute_ops.template_engine import render_version_file

from ..util import load_config_or_exit


def render(
    ctx: typer.Context,
    template: Path = typer.Option(..., "--template", help="Template with {{ version }}, {{ major }}, ... placeholders"),
    out: Path = typer.Option(..., "--out", help="File to generate"),
    path: Path = typer.Option(Path("."), "--path", help="Project root to resolve the version for"),
):
    """Generate a file (header, package metadata) from the resolved version."""
    if not template.is_file():
        typer.echo(f"Template not found: {template}", err=True)
        raise typer.Exit(1)

    config = load_config_or_exit(ctx, path)
    resolved = resolve_version(path, config=config)
    written = render_version_file(template, out, resolved)
    typer.echo(f"{'Wrote' if written else 'Unchanged'}: {out} ({resolved.raw})")
