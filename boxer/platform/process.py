"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so that vagrant and the upload command report failures
as ``ProcessError`` values instead of exceptions.

Usage:
    result = run_silent(["vagrant", "package", "--base", "dev"], cwd=Path("."))
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from boxer.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    vagrant and scp print progress that the user wants to see, so nothing is
    captured here.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
