"""Value types shared by the symbol index and its collaborators.

The index treats definition payloads as opaque. It reads exactly two
attributes, ``fqn`` and ``is_global``, and passes everything else through
unchanged. :class:`Definition` is a ready-made payload for analyzers that
do not bring their own.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Protocol, TypeVar

NAMESPACE_SEPARATOR = "\\"
"""Separator between namespace segments of an FQN (``App\\Models\\User``)."""

STATIC_ACCESS = "::"
INSTANCE_ACCESS = "->"

# Checked in this order; the first operator present in the FQN wins.
MEMBER_OPERATORS: tuple[str, ...] = (STATIC_ACCESS, INSTANCE_ACCESS)


class DefinitionLike(Protocol):
    """Minimum shape the index needs from a definition payload."""

    @property
    def fqn(self) -> str: ...

    @property
    def is_global(self) -> bool: ...


D = TypeVar("D", bound=DefinitionLike)
D_co = TypeVar("D_co", bound=DefinitionLike, covariant=True)


@dataclass(frozen=True, slots=True)
class Definition:
    """A declared symbol as reported by the static analyzer.

    Only ``fqn`` and ``is_global`` matter to the index.
    """

    fqn: str
    is_global: bool = False
    is_static: bool = False
    can_be_instantiated: bool = False
    symbol_kind: str | None = None  # class, function, method, property, constant, ...
    type_name: str | None = None
    declaration_line: str | None = None
    documentation: str | None = None
    extends: tuple[str, ...] = field(default_factory=tuple)


class Completeness(IntEnum):
    """Lifecycle of an index. Only ever moves forward."""

    PARTIAL = 0
    STATIC_COMPLETE = 1
    COMPLETE = 2


class IndexEventKind(str, Enum):
    """Notifications an index emits to subscribers."""

    DEFINITION_ADDED = "definition-added"
    STATIC_COMPLETE = "static-complete"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class IndexEvent:
    """Delivered to listeners. ``fqn`` is set for definition-added only."""

    kind: IndexEventKind
    fqn: str | None = None


Listener = Callable[[IndexEvent], None]


class ReadableIndex(Protocol[D_co]):
    """Query surface shared by a single index and aggregates of indexes."""

    def is_complete(self) -> bool: ...

    def is_static_complete(self) -> bool: ...

    def get_definitions(self) -> Mapping[str, D_co]: ...

    def get_global_definitions(self) -> Mapping[str, D_co]: ...

    def get_definitions_for_scope(self, scope_key: str) -> Mapping[str, D_co]: ...

    def get_definition(self, fqn: str, fallback_to_global: bool = False) -> D_co | None: ...

    def find_with_prefix(self, prefix: str) -> Mapping[str, D_co]: ...

    def get_reference_uris(self, fqn: str) -> set[str]: ...
