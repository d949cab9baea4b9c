"""Which documents reference which symbols."""

from __future__ import annotations


class ReferenceTable:
    """fqn -> set of document URIs.

    A URI appears at most once per symbol. Symbols whose last reference is
    removed are dropped from the table.
    """

    def __init__(self, references: dict[str, set[str]] | None = None) -> None:
        self._refs: dict[str, set[str]] = {}
        for fqn, uris in (references or {}).items():
            if uris:
                self._refs[fqn] = set(uris)

    def __len__(self) -> int:
        return len(self._refs)

    def add_reference_uri(self, fqn: str, uri: str) -> bool:
        """Returns False if ``uri`` was already recorded for ``fqn``."""
        uris = self._refs.setdefault(fqn, set())
        if uri in uris:
            return False
        uris.add(uri)
        return True

    def remove_reference_uri(self, fqn: str, uri: str) -> None:
        uris = self._refs.get(fqn)
        if uris is None:
            return
        uris.discard(uri)
        if not uris:
            del self._refs[fqn]

    def drop_symbol(self, fqn: str) -> None:
        self._refs.pop(fqn, None)

    def get_reference_uris(self, fqn: str) -> set[str]:
        return set(self._refs.get(fqn, ()))

    def get_all_references(self) -> dict[str, set[str]]:
        """Copy of the full table. For tests and diagnostics."""
        return {fqn: set(uris) for fqn, uris in self._refs.items()}
