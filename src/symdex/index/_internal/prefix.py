"""Character trie over symbol names for completion-style prefix queries.

Entries are never deleted. Callers that remove symbols must filter results
against their live set; see ``SymbolIndex.find_with_prefix``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class _Node:
    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: dict[str, _Node] = {}
        self.terminal = False


class PrefixTrie:
    """Set of non-empty strings supporting "all names starting with P"."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._root = _Node()
        self._size = 0
        for name in names:
            self.insert(name)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or not name:
            return False
        node = self._find(name)
        return node is not None and node.terminal

    def __iter__(self) -> Iterator[str]:
        return self._collect(self._root, "")

    def insert(self, name: str) -> bool:
        """Add ``name``. Returns False if it was already present.

        Raises:
            ValueError: If ``name`` is empty.
        """
        if not name:
            raise ValueError("PrefixTrie keys must be non-empty")
        node = self._root
        for ch in name:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = _Node()
            node = child
        if node.terminal:
            return False
        node.terminal = True
        self._size += 1
        return True

    def search_prefix(self, prefix: str) -> set[str]:
        """Return every stored name that starts with ``prefix``.

        An empty prefix matches everything.
        """
        node = self._find(prefix) if prefix else self._root
        if node is None:
            return set()
        return set(self._collect(node, prefix))

    def _find(self, key: str) -> _Node | None:
        node = self._root
        for ch in key:
            next_node = node.children.get(ch)
            if next_node is None:
                return None
            node = next_node
        return node

    @staticmethod
    def _collect(start: _Node, prefix: str) -> Iterator[str]:
        # Iterative DFS; deep namespaces would blow the recursion limit
        stack: list[tuple[_Node, str]] = [(start, prefix)]
        while stack:
            node, path = stack.pop()
            if node.terminal:
                yield path
            for ch, child in node.children.items():
                stack.append((child, path + ch))
