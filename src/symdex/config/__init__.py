"""Config module exports."""

from symdex.config.loader import get_cache_path, load_config
from symdex.config.models import (
    CacheConfig,
    IndexConfig,
    LoggingConfig,
    LogOutputConfig,
    SymdexConfig,
)

__all__ = [
    "load_config",
    "get_cache_path",
    "SymdexConfig",
    "IndexConfig",
    "CacheConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
