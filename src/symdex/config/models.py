"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SYMDEX__SECTION__KEY)
3. Repo YAML (.symdex/config.yaml)
4. Global YAML (~/.config/symdex/config.yaml)
5. Built-in defaults (this file)

Examples:
    SYMDEX__LOGGING__LEVEL=DEBUG
    SYMDEX__INDEX__REBUILD_SEED=42
    SYMDEX__CACHE__COMPRESSION_LEVEL=9
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SYMDEX__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every trie rebuild.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Symbol index tuning.

    Env vars:
        SYMDEX__INDEX__SHUFFLE_ON_REBUILD: Shuffle FQNs before re-inserting into the trie
        SYMDEX__INDEX__REBUILD_SEED: Fixed seed for the rebuild shuffle
        SYMDEX__INDEX__PREFIX_COMPACTION_RATIO: Stale/live ratio that triggers a trie rebuild
        SYMDEX__INDEX__PREFIX_COMPACTION_MIN_STALE: Minimum stale entries before compaction
    """

    shuffle_on_rebuild: bool = Field(
        default=True,
        description="Insert FQNs in randomized order when rebuilding the prefix trie. "
        "Sorted insertion produces lopsided tries on large dependency indexes.",
    )
    rebuild_seed: int | None = Field(
        default=None,
        description="Seed for the rebuild shuffle. None draws a fresh seed per rebuild.",
    )
    prefix_compaction_ratio: float = Field(
        default=1.0,
        description="Rebuild the prefix trie once removed-but-retained entries exceed "
        "this multiple of live definitions. 0 disables compaction.",
    )
    prefix_compaction_min_stale: int = Field(
        default=1024,
        description="Never compact before this many stale trie entries have accumulated.",
    )

    @field_validator("prefix_compaction_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Compaction ratio must be >= 0, got {v}")
        return v

    @field_validator("prefix_compaction_min_stale")
    @classmethod
    def validate_min_stale(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Minimum stale count must be >= 0, got {v}")
        return v


class CacheConfig(BaseModel):
    """Cache snapshot configuration.

    Env vars:
        SYMDEX__CACHE__DIRECTORY: Directory holding cache snapshots
        SYMDEX__CACHE__COMPRESSION_LEVEL: zlib level (0-9)
    """

    directory: str | None = Field(
        default=None,
        description="Where cache snapshots are written. Default: .symdex/cache in the project.",
    )
    compression_level: int = Field(
        default=6,
        description="zlib compression level. 0 stores uncompressed, 9 is smallest but slowest.",
    )

    @field_validator("compression_level")
    @classmethod
    def validate_compression_level(cls, v: int) -> int:
        if not (0 <= v <= 9):
            raise ValueError(f"Compression level must be 0-9, got {v}")
        return v


class SymdexConfig(BaseModel):
    """Root configuration for symdex."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
