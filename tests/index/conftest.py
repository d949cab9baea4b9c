"""Shared fixtures for index tests."""

from __future__ import annotations

import pytest

from symdex.config.models import IndexConfig
from symdex.index import Definition, SymbolIndex


@pytest.fixture
def index_config() -> IndexConfig:
    """Deterministic rebuilds, compaction off unless a test asks for it."""
    return IndexConfig(rebuild_seed=1234, prefix_compaction_ratio=0)


@pytest.fixture
def index(index_config: IndexConfig) -> SymbolIndex[Definition]:
    return SymbolIndex(index_config)


@pytest.fixture
def populated(index: SymbolIndex[Definition]) -> SymbolIndex[Definition]:
    """A small PHP-style project: a class, its members, a function and a global."""
    for definition in (
        Definition("App\\User"),
        Definition("App\\User::save()"),
        Definition("App\\User::TABLE"),
        Definition("App\\User->name"),
        Definition("App\\helper()"),
        Definition("User", is_global=True),
        Definition("strlen()", is_global=True),
    ):
        index.set_definition(definition.fqn, definition)
    index.add_reference_uri("App\\User", "file:///src/Controller.php")
    index.add_reference_uri("App\\User", "file:///src/routes.php")
    index.add_reference_uri("strlen()", "file:///src/helpers.php")
    return index
