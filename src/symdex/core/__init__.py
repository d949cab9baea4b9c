"""Core module exports."""

from symdex.core.errors import (
    CacheCorruptError,
    ConfigError,
    ErrorCode,
    InternalError,
    InvalidSymbolError,
    SymdexError,
)
from symdex.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "CacheCorruptError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "InvalidSymbolError",
    "SymdexError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
