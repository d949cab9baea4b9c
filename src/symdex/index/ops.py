"""SymbolIndex: the index of one project or one dependency package.

This is the object analyzers populate and query consumers read. Every call
runs under a single re-entrant lock covering the symbol table, scope
directory, prefix trie, reference table and completeness state, so readers
never observe a half-applied mutation. Notifications are delivered after
the lock is released, synchronously and in listener-registration order.

Usage:
    index = SymbolIndex()
    index.set_definition("App\\\\User", Definition("App\\\\User"))
    index.add_reference_uri("App\\\\User", "file:///src/Controller.php")
    index.mark_complete()

    index.find_with_prefix("App\\\\U")
    payload = index.encode()
    restored = SymbolIndex.decode(payload)
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Generic

from symdex.config.models import IndexConfig
from symdex.core.logging import get_logger
from symdex.index._internal.completion import CompletionState
from symdex.index._internal.events import EventEmitter
from symdex.index._internal.references import ReferenceTable
from symdex.index._internal.symbols import SymbolTable
from symdex.index.models import Completeness, D, IndexEvent, IndexEventKind, Listener

if TYPE_CHECKING:
    from symdex.index.cache import CacheCodec

log = get_logger("index")


class SymbolIndex(Generic[D]):
    """Queryable record of declared symbols and the documents that reference them."""

    def __init__(self, config: IndexConfig | None = None, *, name: str = "project") -> None:
        self.name = name
        self._config = config or IndexConfig()
        self._lock = threading.RLock()
        self._symbols: SymbolTable[D] = SymbolTable(self._config)
        self._references = ReferenceTable()
        self._completion = CompletionState()
        self._events = EventEmitter()

    def __repr__(self) -> str:
        return (
            f"SymbolIndex(name={self.name!r}, definitions={len(self)}, "
            f"completeness={self.completeness.name})"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._symbols)

    def __contains__(self, fqn: object) -> bool:
        with self._lock:
            return fqn in self._symbols

    @property
    def config(self) -> IndexConfig:
        return self._config

    # -- notifications ----------------------------------------------------

    def subscribe(self, kind: IndexEventKind, listener: Listener) -> None:
        """Register ``listener`` for ``kind``. Listeners must not mutate this index."""
        with self._lock:
            self._events.subscribe(kind, listener)

    def unsubscribe(self, kind: IndexEventKind, listener: Listener) -> bool:
        with self._lock:
            return self._events.unsubscribe(kind, listener)

    def _emit(self, *events: IndexEvent) -> None:
        for event in events:
            self._events.emit(event)

    # -- mutation ---------------------------------------------------------

    def set_definition(self, fqn: str, definition: D) -> None:
        """Register or overwrite the definition of ``fqn``.

        Raises:
            InvalidSymbolError: If ``fqn`` is empty.
        """
        with self._lock:
            self._symbols.set_definition(fqn, definition)
            notify = self._events.has_listeners(IndexEventKind.DEFINITION_ADDED)
        if notify:
            self._emit(IndexEvent(IndexEventKind.DEFINITION_ADDED, fqn))

    def remove_definition(self, fqn: str) -> None:
        """Forget ``fqn`` and every reference to it. No-op if unknown."""
        with self._lock:
            self._symbols.remove_definition(fqn)
            self._references.drop_symbol(fqn)

    def add_reference_uri(self, fqn: str, uri: str) -> None:
        with self._lock:
            self._references.add_reference_uri(fqn, uri)

    def remove_reference_uri(self, fqn: str, uri: str) -> None:
        with self._lock:
            self._references.remove_reference_uri(fqn, uri)

    def mark_static_complete(self) -> None:
        """All files in scope have been statically analyzed."""
        with self._lock:
            kinds = self._completion.mark_static_complete()
        self._after_transition(kinds)

    def mark_complete(self) -> None:
        """Static analysis and cross-file resolution have both finished."""
        with self._lock:
            kinds = self._completion.mark_complete()
        self._after_transition(kinds)

    def _after_transition(self, kinds: list[IndexEventKind]) -> None:
        for kind in kinds:
            log.info("index_completeness_changed", index=self.name, state=kind.value, definitions=len(self))
        self._emit(*(IndexEvent(kind) for kind in kinds))

    def rebuild_prefix_index(self) -> None:
        """Drop stale names from the prefix trie."""
        with self._lock:
            self._symbols.rebuild_prefix_index()

    # -- queries ----------------------------------------------------------

    @property
    def completeness(self) -> Completeness:
        with self._lock:
            return self._completion.state

    def is_static_complete(self) -> bool:
        with self._lock:
            return self._completion.is_static_complete

    def is_complete(self) -> bool:
        with self._lock:
            return self._completion.is_complete

    def get_definition(self, fqn: str, fallback_to_global: bool = False) -> D | None:
        """Definition of ``fqn``, or None.

        With ``fallback_to_global``, an unknown namespaced name is retried once
        with its last namespace segment, so ``App\\strlen`` finds ``strlen``.
        """
        with self._lock:
            return self._symbols.get_definition(fqn, fallback_to_global)

    def get_definitions(self) -> dict[str, D]:
        with self._lock:
            return self._symbols.get_definitions()

    def get_global_definitions(self) -> dict[str, D]:
        with self._lock:
            return self._symbols.get_global_definitions()

    def get_definitions_for_scope(self, scope_key: str) -> dict[str, D]:
        """Members grouped under ``scope_key``, e.g. every ``App\\User::*`` and ``App\\User->*``."""
        with self._lock:
            return self._symbols.get_definitions_for_scope(scope_key)

    def find_with_prefix(self, prefix: str) -> dict[str, D]:
        """Live definitions whose FQN starts with ``prefix``. Empty prefix returns all."""
        with self._lock:
            return self._symbols.find_with_prefix(prefix)

    def get_reference_uris(self, fqn: str) -> set[str]:
        with self._lock:
            return self._references.get_reference_uris(fqn)

    def get_all_references(self) -> dict[str, set[str]]:
        """Every reference set keyed by FQN. For tests and diagnostics."""
        with self._lock:
            return self._references.get_all_references()

    # -- persistence ------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """The persisted fields, copied under the lock."""
        with self._lock:
            return {
                "definitions": self._symbols.get_definitions(),
                "references": self._references.get_all_references(),
                "complete": self._completion.is_complete,
                "static_complete": self._completion.is_static_complete,
            }

    @classmethod
    def restore(
        cls,
        definitions: dict[str, D],
        references: dict[str, set[str]],
        *,
        static_complete: bool,
        complete: bool,
        config: IndexConfig | None = None,
        name: str = "project",
    ) -> SymbolIndex[D]:
        """Build an index from persisted fields, rebuilding every derived view.

        No notifications are emitted.
        """
        index: SymbolIndex[D] = cls(config, name=name)
        index._symbols.load(definitions)
        index._references = ReferenceTable(references)
        index._completion = CompletionState.from_flags(static_complete=static_complete, complete=complete)
        return index

    def encode(self, codec: CacheCodec | None = None) -> bytes:
        from symdex.index.cache import CacheCodec

        return (codec or CacheCodec()).encode(self)

    @classmethod
    def decode(
        cls,
        payload: bytes,
        codec: CacheCodec | None = None,
        *,
        config: IndexConfig | None = None,
        name: str = "project",
    ) -> SymbolIndex[Any]:
        """Raises CacheCorruptError if ``payload`` is not a valid snapshot."""
        from symdex.index.cache import CacheCodec

        return (codec or CacheCodec()).decode(payload, config=config, name=name)
