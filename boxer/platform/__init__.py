"""Platform helpers: subprocess execution and filesystem access."""

from .files import atomic_write_text, file_checksum
from .process import ProcessError, run_silent

__all__ = ["ProcessError", "atomic_write_text", "file_checksum", "run_silent"]
