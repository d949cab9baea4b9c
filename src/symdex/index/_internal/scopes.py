"""Grouping of symbols by owner (the part of an FQN before ``::`` or ``->``)."""

from __future__ import annotations

from typing import Generic

from symdex.index.models import MEMBER_OPERATORS, D


def scope_key(fqn: str) -> str:
    """Owner portion of ``fqn``.

    ``App\\User::save()`` and ``App\\User->name`` both map to ``App\\User``.
    An FQN without a member operator is its own scope.
    """
    for operator in MEMBER_OPERATORS:
        pos = fqn.find(operator)
        if pos != -1:
            return fqn[:pos]
    return fqn


class ScopeDirectory(Generic[D]):
    """scope key -> {fqn: definition}. Empty groups are pruned on removal."""

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, D]] = {}

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def add_to_scope(self, fqn: str, definition: D) -> None:
        self._groups.setdefault(scope_key(fqn), {})[fqn] = definition

    def remove_from_scope(self, fqn: str) -> None:
        key = scope_key(fqn)
        group = self._groups.get(key)
        if group is None:
            return
        group.pop(fqn, None)
        if not group:
            del self._groups[key]

    def get_scope(self, key: str) -> dict[str, D]:
        return dict(self._groups.get(key, {}))

    def clear(self) -> None:
        self._groups.clear()
