"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from boxer.core.errors import BoxerError, exit_code_for
from boxer.output.console import Style

if TYPE_CHECKING:
    from boxer.output.console import ConsoleProtocol

__all__ = ["print_boxer_error", "boxer_error_exit_code"]


def print_boxer_error(error: BoxerError, console: ConsoleProtocol) -> None:
    """Print a BoxerError with its hint and failing stage."""
    match error.kind:
        case "invalid_input":
            console.error(f"Invalid input: {error.message}")
        case "missing_argument":
            console.error(f"Missing argument: {error.message}")
        case "consistency_error":
            console.error(f"Inconsistent metadata: {error.message}")
        case _:
            console.error(error.message)

    if error.stage:
        console.print(f"release aborted at stage: {error.stage}", Style.DIM)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def boxer_error_exit_code(error: BoxerError) -> int:
    return int(exit_code_for(error))
