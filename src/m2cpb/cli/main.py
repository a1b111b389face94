"""m2cpb CLI entrypoint.

Typer application; subcommands live in `m2cpb.cli.commands` and register
themselves on `app`.
"""

from __future__ import annotations

import typer

app = typer.Typer(
    name="m2cpb",
    add_completion=False,
    no_args_is_help=True,
    help=(
        "Magento2 Component Package Builder. Builds a ZIP package of a Magento2 component "
        "(module, theme, language or library)."
    ),
)


@app.callback()
def _callback() -> None:
    """m2cpb CLI."""
    # Intentionally empty; subcommands are registered below.
    return


@app.command("version")
def version() -> None:
    """Print the installed m2cpb version."""
    from m2cpb import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `m2cpb --help` is fast.
    """
    from m2cpb.cli.commands import build_pkg as build_pkg_cmd
    from m2cpb.cli.commands import inspect_pkg as inspect_pkg_cmd

    build_pkg_cmd.register(app)
    inspect_pkg_cmd.register(app)


_register_commands()


def main() -> None:
    app()
