"""Cache snapshots of a SymbolIndex.

Only the definitions, the references and the two completeness flags are
persisted. The global-definition filter, scope directory and prefix trie
are derived and rebuilt on decode.

Payload layout::

    b"SYMDEX" | version (1 byte) | zlib(pickle({definitions, references,
                                                complete, static_complete}))

Definition payloads are pickled as-is, so their classes must be importable
when the snapshot is loaded. Snapshots are local caches written by this
process; never decode payloads from an untrusted source.
"""

from __future__ import annotations

import os
import pickle
import tempfile
import zlib
from pathlib import Path
from typing import Any

from symdex.config.models import CacheConfig, IndexConfig
from symdex.core.errors import CacheCorruptError, InternalError
from symdex.core.logging import get_logger
from symdex.index.ops import SymbolIndex

log = get_logger("index.cache")

MAGIC = b"SYMDEX"
FORMAT_VERSION = 1
_HEADER_LEN = len(MAGIC) + 1
_FIELDS = frozenset({"definitions", "references", "complete", "static_complete"})


class CacheCodec:
    """Encodes an index to bytes and back."""

    def __init__(self, compression_level: int = 6) -> None:
        self.compression_level = compression_level

    @classmethod
    def from_config(cls, config: CacheConfig) -> CacheCodec:
        return cls(compression_level=config.compression_level)

    def encode(self, index: SymbolIndex[Any]) -> bytes:
        """Serialize the persisted fields of ``index``.

        Raises:
            InternalError: If a definition payload cannot be pickled.
        """
        snapshot = index.snapshot()
        try:
            body = pickle.dumps(snapshot, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise InternalError.unexpected(f"definition payload is not picklable: {e}", index=index.name) from e
        return MAGIC + bytes([FORMAT_VERSION]) + zlib.compress(body, self.compression_level)

    def decode(
        self,
        payload: bytes,
        *,
        config: IndexConfig | None = None,
        name: str = "project",
    ) -> SymbolIndex[Any]:
        """Restore an index from ``payload``.

        Raises:
            CacheCorruptError: On any payload that is not a valid snapshot.
        """
        data = self._read_body(payload)
        definitions, references = _validate(data)
        return SymbolIndex.restore(
            definitions,
            references,
            static_complete=data["static_complete"],
            complete=data["complete"],
            config=config,
            name=name,
        )

    @staticmethod
    def _read_body(payload: bytes) -> dict[str, Any]:
        if len(payload) < _HEADER_LEN:
            raise CacheCorruptError.undecodable(f"payload too short ({len(payload)} bytes)")
        if payload[: len(MAGIC)] != MAGIC:
            raise CacheCorruptError.bad_magic(bytes(payload[: len(MAGIC)]))
        version = payload[len(MAGIC)]
        if version != FORMAT_VERSION:
            raise CacheCorruptError.unsupported_version(version, FORMAT_VERSION)
        try:
            body = zlib.decompress(payload[_HEADER_LEN:])
        except zlib.error as e:
            raise CacheCorruptError.undecodable(f"zlib: {e}") from e
        try:
            data = pickle.loads(body)  # noqa: S301
        except Exception as e:  # noqa: BLE001 - unpickling raises arbitrary types on bad input
            raise CacheCorruptError.undecodable(f"{type(e).__name__}: {e}") from e
        if not isinstance(data, dict) or set(data) != _FIELDS:
            raise CacheCorruptError.malformed("<root>", f"expected keys {sorted(_FIELDS)}")
        return data


def _validate(data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, set[str]]]:
    definitions = data["definitions"]
    if not isinstance(definitions, dict):
        raise CacheCorruptError.malformed("definitions", "not a mapping")
    for fqn, definition in definitions.items():
        if not isinstance(fqn, str) or not fqn:
            raise CacheCorruptError.malformed("definitions", f"invalid fqn {fqn!r}")
        if not hasattr(definition, "is_global"):
            raise CacheCorruptError.malformed("definitions", f"payload for {fqn!r} has no is_global")

    raw_refs = data["references"]
    if not isinstance(raw_refs, dict):
        raise CacheCorruptError.malformed("references", "not a mapping")
    references: dict[str, set[str]] = {}
    for fqn, uris in raw_refs.items():
        if not isinstance(fqn, str) or not isinstance(uris, (set, frozenset, list, tuple)):
            raise CacheCorruptError.malformed("references", f"invalid entry for {fqn!r}")
        if not all(isinstance(uri, str) for uri in uris):
            raise CacheCorruptError.malformed("references", f"non-string uri for {fqn!r}")
        references[fqn] = set(uris)

    for flag in ("complete", "static_complete"):
        if not isinstance(data[flag], bool):
            raise CacheCorruptError.malformed(flag, "not a bool")
    if data["complete"] and not data["static_complete"]:
        raise CacheCorruptError.malformed("complete", "complete without static_complete")
    return definitions, references


def save_cache(index: SymbolIndex[Any], path: Path, codec: CacheCodec | None = None) -> int:
    """Atomically write ``index`` to ``path``. Returns the payload size in bytes."""
    payload = (codec or CacheCodec()).encode(index)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    log.info("index_cache_saved", index=index.name, path=str(path), bytes=len(payload), definitions=len(index))
    return len(payload)


def load_cache(
    path: Path,
    codec: CacheCodec | None = None,
    *,
    config: IndexConfig | None = None,
    name: str = "project",
) -> SymbolIndex[Any] | None:
    """Load a snapshot written by :func:`save_cache`.

    Returns None when there is no usable cache (missing or corrupt file);
    the caller then rebuilds the index from source.
    """
    try:
        payload = path.read_bytes()
    except FileNotFoundError:
        log.debug("index_cache_missing", index=name, path=str(path))
        return None
    try:
        index = (codec or CacheCodec()).decode(payload, config=config, name=name)
    except CacheCorruptError as e:
        log.warning("index_cache_corrupt", index=name, path=str(path), error=e.error_name, reason=e.message)
        return None
    log.info("index_cache_loaded", index=name, path=str(path), definitions=len(index))
    return index
