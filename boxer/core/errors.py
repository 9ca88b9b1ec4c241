"""Error taxonomy and process exit codes.

Every expected failure in boxer is described by a ``BoxerError`` whose
``kind`` selects the exit code the CLI terminates with. The numeric codes are
part of the command-line contract and should remain stable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path
from typing import Literal

__all__ = ["BoxerError", "ErrorCode", "ErrorKind", "exit_code_for"]


ErrorKind = Literal[
    "invalid_input",
    "missing_argument",
    "external_tool_failure",
    "io_failure",
    "consistency_error",
    "no_such_field",
]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (missing or bad command-line arguments)
    - 2: Input error (malformed metadata or configuration)
    - 3: Tool error (vagrant or the upload command failed)
    - 4: Consistency error (catalog contents contradict themselves)
    - 5: I/O error (file cannot be read or written)
    """

    OK = 0
    USER_ERROR = 1
    INPUT_ERROR = 2
    TOOL_ERROR = 3
    CONSISTENCY_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


@dataclass(frozen=True, slots=True)
class BoxerError:
    """A failure surfaced to the top of a release run.

    Attributes:
        kind: Taxonomy tag, see ``ErrorKind``.
        message: One-line description for the user.
        hint: Optional remediation shown dimmed under the message.
        path: File the error relates to, when there is one.
        stage: Release stage reached when the error occurred.
    """

    kind: ErrorKind
    message: str
    hint: str | None = None
    path: Path | None = None
    stage: str | None = None

    def at_stage(self, stage: str) -> BoxerError:
        """Return a copy tagged with the release stage that failed."""
        return replace(self, stage=stage)


_EXIT_CODES: dict[ErrorKind, ErrorCode] = {
    "missing_argument": ErrorCode.USER_ERROR,
    "invalid_input": ErrorCode.INPUT_ERROR,
    "external_tool_failure": ErrorCode.TOOL_ERROR,
    "consistency_error": ErrorCode.CONSISTENCY_ERROR,
    "no_such_field": ErrorCode.CONSISTENCY_ERROR,
    "io_failure": ErrorCode.IO_ERROR,
}


def exit_code_for(error: BoxerError) -> ErrorCode:
    return _EXIT_CODES[error.kind]
