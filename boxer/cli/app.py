from __future__ import annotations

import typer

from boxer import __version__
from boxer.cli.commands.package import package
from boxer.cli.commands.versions import versions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(package)
app.command()(versions)


def _print_version(value: bool) -> None:
    # Eager: must run before click complains about the missing subcommand.
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_print_version, is_eager=True
    ),
) -> None:
    """Package Vagrant boxes and maintain their version catalog."""


def main() -> None:
    app()
