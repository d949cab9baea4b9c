"""Symbol index: definitions, references, completeness and cache snapshots."""

from symdex.index._internal.scopes import scope_key
from symdex.index.cache import CacheCodec, load_cache, save_cache
from symdex.index.models import (
    NAMESPACE_SEPARATOR,
    Completeness,
    Definition,
    DefinitionLike,
    IndexEvent,
    IndexEventKind,
    Listener,
    ReadableIndex,
)
from symdex.index.ops import SymbolIndex

__all__ = [
    "NAMESPACE_SEPARATOR",
    "CacheCodec",
    "Completeness",
    "Definition",
    "DefinitionLike",
    "IndexEvent",
    "IndexEventKind",
    "Listener",
    "ReadableIndex",
    "SymbolIndex",
    "load_cache",
    "save_cache",
    "scope_key",
]
