"""Canonical fqn -> definition mapping and its derived views.

``SymbolTable`` keeps three structures in step with ``definitions``:

- the global-definition filter
- the scope directory (members grouped under their owner)
- the prefix trie used for completion

The trie is append-only. Removing a definition leaves its name in the trie
and every prefix query filters hits against the live definitions. Once
stale names outnumber live ones (see ``IndexConfig.prefix_compaction_ratio``)
the trie is rebuilt from scratch.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Generic

from symdex.config.models import IndexConfig
from symdex.core.errors import InvalidSymbolError
from symdex.core.logging import get_logger
from symdex.index._internal.prefix import PrefixTrie
from symdex.index._internal.scopes import ScopeDirectory
from symdex.index.models import NAMESPACE_SEPARATOR, D

log = get_logger("index.symbols")


class SymbolTable(Generic[D]):
    def __init__(self, config: IndexConfig | None = None) -> None:
        self._config = config or IndexConfig()
        self._definitions: dict[str, D] = {}
        self._global_definitions: dict[str, D] = {}
        self._scopes: ScopeDirectory[D] = ScopeDirectory()
        self._trie = PrefixTrie()

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, fqn: object) -> bool:
        return fqn in self._definitions

    @property
    def stale_prefix_entries(self) -> int:
        """Names still in the trie whose definition has been removed."""
        return len(self._trie) - len(self._definitions)

    # -- mutation ---------------------------------------------------------

    def set_definition(self, fqn: str, definition: D) -> None:
        if not fqn:
            raise InvalidSymbolError.empty_fqn()
        self._definitions[fqn] = definition
        if definition.is_global:
            self._global_definitions[fqn] = definition
        else:
            # An overwrite may demote a global symbol
            self._global_definitions.pop(fqn, None)
        self._scopes.add_to_scope(fqn, definition)
        self._trie.insert(fqn)

    def remove_definition(self, fqn: str) -> bool:
        """Returns False if ``fqn`` was not defined."""
        if self._definitions.pop(fqn, None) is None:
            return False
        self._global_definitions.pop(fqn, None)
        self._scopes.remove_from_scope(fqn)
        if self._should_compact():
            self.rebuild_prefix_index()
        return True

    def load(self, definitions: Mapping[str, D]) -> None:
        """Replace all content with ``definitions`` and rebuild derived views."""
        self._definitions = dict(definitions)
        self._global_definitions = {
            fqn: definition for fqn, definition in self._definitions.items() if definition.is_global
        }
        self._scopes.clear()
        for fqn, definition in self._definitions.items():
            self._scopes.add_to_scope(fqn, definition)
        self.rebuild_prefix_index()

    def rebuild_prefix_index(self) -> None:
        """Recreate the trie from live definitions only."""
        names = list(self._definitions)
        if self._config.shuffle_on_rebuild:
            random.Random(self._config.rebuild_seed).shuffle(names)
        stale = self.stale_prefix_entries
        self._trie = PrefixTrie(names)
        log.debug("prefix_index_rebuilt", symbols=len(names), dropped_stale=max(stale, 0))

    def _should_compact(self) -> bool:
        ratio = self._config.prefix_compaction_ratio
        if ratio <= 0:
            return False
        stale = self.stale_prefix_entries
        return stale >= self._config.prefix_compaction_min_stale and stale > ratio * len(self._definitions)

    # -- queries ----------------------------------------------------------

    def get_definition(self, fqn: str, fallback_to_global: bool = False) -> D | None:
        """Exact lookup, optionally retried once with the last namespace segment.

        ``App\\Util\\strlen`` falls back to ``strlen``. The fallback does not
        itself fall back.
        """
        definition = self._definitions.get(fqn)
        if definition is not None or not fallback_to_global:
            return definition
        return self._definitions.get(fqn.rsplit(NAMESPACE_SEPARATOR, 1)[-1])

    def get_definitions(self) -> dict[str, D]:
        return dict(self._definitions)

    def get_global_definitions(self) -> dict[str, D]:
        return dict(self._global_definitions)

    def get_definitions_for_scope(self, scope_key: str) -> dict[str, D]:
        return self._scopes.get_scope(scope_key)

    def find_with_prefix(self, prefix: str) -> dict[str, D]:
        if not prefix:
            return dict(self._definitions)
        definitions = self._definitions
        return {fqn: definitions[fqn] for fqn in self._trie.search_prefix(prefix) if fqn in definitions}
