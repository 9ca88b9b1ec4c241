"""Core domain types and logic."""

from .config import BoxerConfig, ConfigOverrides, load_config_file, resolve_config
from .errors import BoxerError, ErrorCode, ErrorKind, exit_code_for
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "BoxerConfig",
    "ConfigOverrides",
    "load_config_file",
    "resolve_config",
    # errors
    "BoxerError",
    "ErrorCode",
    "ErrorKind",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
