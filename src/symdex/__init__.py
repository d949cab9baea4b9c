"""Symdex - symbol index for source-code intelligence."""

from symdex.index import CacheCodec, Definition, IndexEventKind, SymbolIndex

__version__ = "0.1.0"

__all__ = ["CacheCodec", "Definition", "IndexEventKind", "SymbolIndex", "__version__"]
