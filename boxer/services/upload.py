"""Remote transfer of the files produced by a release run."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from boxer.core.errors import BoxerError
from boxer.core.result import Err, Ok, Result
from boxer.output.console import ConsoleProtocol
from boxer.platform.process import run_silent

__all__ = ["transfer_files"]


def transfer_files(
    paths: Sequence[Path],
    destination: str,
    *,
    command: Sequence[str],
    cwd: Path,
    console: ConsoleProtocol,
) -> Result[None, BoxerError]:
    """Run ``<command...> <paths...> <destination>``, e.g. ``scp a.box metadata.json host:/srv``."""
    cmd = [*command, *(str(p) for p in paths), destination]
    console.debug(f"EXEC: {' '.join(cmd)}")
    result = run_silent(cmd, cwd=cwd)
    if isinstance(result, Err):
        return Err(
            BoxerError(
                "external_tool_failure",
                f"upload to {destination} failed, exit code={result.error.returncode}",
                hint=f"Command: {' '.join(cmd)}",
            )
        )
    return Ok(None)
