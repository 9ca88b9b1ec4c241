"""Box packaging: run ``vagrant package`` and stage the resulting artifact."""

from __future__ import annotations

import shutil
from pathlib import Path

from boxer.core.errors import BoxerError
from boxer.core.result import Err, Ok, Result
from boxer.output.console import ConsoleProtocol
from boxer.platform.files import file_checksum
from boxer.platform.process import run_silent

__all__ = ["check_box_output", "checksum_box", "package_box", "stage_box"]


def check_box_output(output: Path) -> Result[None, BoxerError]:
    """Vagrant only accepts output names ending in ``.box``."""
    if output.suffix != ".box":
        return Err(
            BoxerError(
                "invalid_input",
                f"vagrant box output filename must end in .box: {output}",
                path=output,
            )
        )
    return Ok(None)


def package_box(
    *,
    vagrant: str,
    vm_name: str,
    output: Path,
    cwd: Path,
    console: ConsoleProtocol,
) -> Result[Path, BoxerError]:
    """Package the VM ``vm_name`` into ``output``.

    Any previous ``output`` is removed first; vagrant refuses to overwrite it.
    """
    checked = check_box_output(output)
    if isinstance(checked, Err):
        return checked

    target = output if output.is_absolute() else cwd / output
    try:
        target.unlink(missing_ok=True)
    except OSError as e:
        return Err(BoxerError("io_failure", f"Cannot remove {target}: {e}", path=target))

    cmd = [vagrant, "package", "--base", vm_name, "--output", str(output)]
    console.debug(f"EXEC: {' '.join(cmd)}")
    result = run_silent(cmd, cwd=cwd)
    if isinstance(result, Err):
        return Err(
            BoxerError(
                "external_tool_failure",
                f"vagrant package failed, exit code={result.error.returncode}",
                hint=f"Command: {' '.join(cmd)}",
            )
        )

    if not target.is_file():
        return Err(
            BoxerError(
                "external_tool_failure",
                f"vagrant package seems to have failed: {target} does not exist",
                path=target,
            )
        )
    return Ok(target)


def stage_box(source: Path, dest: Path, console: ConsoleProtocol) -> Result[Path, BoxerError]:
    """Copy the packaged box to its versioned file name.

    The source stays in place so a later ``--keep-package`` run can reuse it.
    """
    try:
        if dest.exists() and dest.resolve() == source.resolve():
            return Ok(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        console.debug(f"Copying {source} -> {dest}")
        shutil.copyfile(source, dest)
    except OSError as e:
        return Err(BoxerError("io_failure", f"Cannot copy {source} to {dest}: {e}", path=dest))
    return Ok(dest)


def checksum_box(path: Path, checksum_type: str) -> Result[str, BoxerError]:
    try:
        return Ok(file_checksum(path, checksum_type))
    except OSError as e:
        return Err(BoxerError("io_failure", f"Cannot checksum {path}: {e}", path=path))
    except ValueError as e:
        return Err(BoxerError("invalid_input", f"Unsupported checksum type {checksum_type}: {e}"))
