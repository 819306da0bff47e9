from __future__ import annotations

import typer

app = typer.Typer(help="vercompute: derive a project version from .version, git tags or package.xml")


@app.callback()
def _init(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    verbosity = None
    if verbose:
        verbosity = "debug"
    elif quiet:
        verbosity = "error"
    ctx.obj = {"verbosity": verbosity}


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands.doctor import doctor as doctor_fn  # noqa: E402
from .commands.render import render as render_fn  # noqa: E402
from .commands.show import show as show_fn, split as split_fn  # noqa: E402

app.command(name="show")(show_fn)
app.command(name="split")(split_fn)
app.command(name="render")(render_fn)
app.command(name="doctor")(doctor_fn)
app.add_typer(config_cmd.app, name="config", help="Configuration inspection and validation")


def main():
    app()
