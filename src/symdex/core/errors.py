"""Symdex error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index
- 9xxx: Internal

Absence of a symbol or reference is never an error; lookups return ``None``
or an empty collection. Errors here are either recoverable (a corrupt cache
means "rebuild from scratch") or programming errors.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004

    # Index (3xxx)
    CACHE_CORRUPT = 3001
    INVALID_SYMBOL = 3002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class SymdexError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CACHE_CORRUPT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SymdexError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class CacheCorruptError(SymdexError):
    """Cache payload could not be decoded.

    Callers treat this as a cache miss and rebuild the index from source.
    """

    @classmethod
    def bad_magic(cls, header: bytes) -> "CacheCorruptError":
        return cls(
            code=ErrorCode.CACHE_CORRUPT,
            message="Payload is not a symbol index cache",
            retryable=True,
            details={"header": header.hex()},
        )

    @classmethod
    def unsupported_version(cls, version: int, supported: int) -> "CacheCorruptError":
        return cls(
            code=ErrorCode.CACHE_CORRUPT,
            message=f"Unsupported cache format version {version} (expected {supported})",
            retryable=True,
            details={"version": version, "supported": supported},
        )

    @classmethod
    def undecodable(cls, reason: str) -> "CacheCorruptError":
        return cls(
            code=ErrorCode.CACHE_CORRUPT,
            message=f"Cache payload could not be decoded: {reason}",
            retryable=True,
            details={"reason": reason},
        )

    @classmethod
    def malformed(cls, field: str, reason: str) -> "CacheCorruptError":
        return cls(
            code=ErrorCode.CACHE_CORRUPT,
            message=f"Malformed cache field '{field}': {reason}",
            retryable=True,
            details={"field": field, "reason": reason},
        )


class InvalidSymbolError(SymdexError):
    """Programming error: a symbol cannot be stored under the given name."""

    @classmethod
    def empty_fqn(cls) -> "InvalidSymbolError":
        return cls(
            code=ErrorCode.INVALID_SYMBOL,
            message="Fully qualified name must be a non-empty string",
        )


class InternalError(SymdexError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
