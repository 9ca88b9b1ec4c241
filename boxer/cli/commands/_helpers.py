"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from boxer.core.errors import BoxerError
from boxer.core.result import Ok, Result
from boxer.output.errors import boxer_error_exit_code, print_boxer_error

if TYPE_CHECKING:
    from boxer.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, BoxerError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Ok):
        return result.value
    print_boxer_error(result.error, ctx.console)
    raise typer.Exit(code=boxer_error_exit_code(result.error))