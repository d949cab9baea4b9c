"""Tests for SymbolTable: lookup, global filter, scopes and trie upkeep."""

import pytest

from symdex.config.models import IndexConfig
from symdex.core.errors import InvalidSymbolError
from symdex.index._internal.symbols import SymbolTable
from symdex.index.models import Definition


def _table(**config: object) -> SymbolTable[Definition]:
    return SymbolTable(IndexConfig(rebuild_seed=99, **config))  # type: ignore[arg-type]


class TestSetDefinition:
    def test_overwrite_last_write_wins(self) -> None:
        table = _table()
        table.set_definition("A", Definition("A", documentation="old"))
        table.set_definition("A", Definition("A", documentation="new"))

        assert len(table) == 1
        assert table.get_definition("A") == Definition("A", documentation="new")

    def test_overwrite_demotes_global(self) -> None:
        table = _table()
        table.set_definition("A", Definition("A", is_global=True))
        table.set_definition("A", Definition("A", is_global=False))

        assert table.get_global_definitions() == {}

    def test_empty_fqn_is_programming_error(self) -> None:
        table = _table()
        with pytest.raises(InvalidSymbolError):
            table.set_definition("", Definition(""))
        assert len(table) == 0
        assert table.find_with_prefix("") == {}


class TestGetDefinition:
    def test_fallback_uses_last_namespace_segment(self) -> None:
        table = _table()
        strlen = Definition("strlen()", is_global=True)
        table.set_definition("strlen()", strlen)

        assert table.get_definition("App\\Util\\strlen()") is None
        assert table.get_definition("App\\Util\\strlen()", fallback_to_global=True) is strlen

    def test_fallback_is_single_hop(self) -> None:
        table = _table()
        table.set_definition("C", Definition("C"))

        # "A\B\C" -> "C" found; "A\B\X" -> "X" absent and no further retry
        assert table.get_definition("A\\B\\C", fallback_to_global=True) is not None
        assert table.get_definition("A\\B\\X", fallback_to_global=True) is None

    def test_exact_match_preferred_over_fallback(self) -> None:
        table = _table()
        namespaced = Definition("App\\User")
        table.set_definition("App\\User", namespaced)
        table.set_definition("User", Definition("User", is_global=True))

        assert table.get_definition("App\\User", fallback_to_global=True) is namespaced


class TestRemoveDefinition:
    def test_remove_clears_all_views(self) -> None:
        table = _table()
        table.set_definition("A::x", Definition("A::x", is_global=True))

        assert table.remove_definition("A::x") is True

        assert "A::x" not in table
        assert table.get_global_definitions() == {}
        assert table.get_definitions_for_scope("A") == {}
        assert table.find_with_prefix("A") == {}

    def test_remove_unknown_returns_false(self) -> None:
        assert _table().remove_definition("nope") is False

    def test_stale_trie_entries_filtered(self) -> None:
        table = _table(prefix_compaction_ratio=0)
        table.set_definition("A\\B", Definition("A\\B"))
        table.set_definition("A\\Build", Definition("A\\Build"))
        table.remove_definition("A\\Build")

        assert table.stale_prefix_entries == 1
        assert set(table.find_with_prefix("A\\B")) == {"A\\B"}

    def test_reinsert_after_remove_is_found_again(self) -> None:
        table = _table(prefix_compaction_ratio=0)
        table.set_definition("A", Definition("A"))
        table.remove_definition("A")
        table.set_definition("A", Definition("A"))

        assert table.stale_prefix_entries == 0
        assert set(table.find_with_prefix("A")) == {"A"}


class TestCompaction:
    def test_compacts_when_stale_exceeds_ratio(self) -> None:
        table = _table(prefix_compaction_ratio=1.0, prefix_compaction_min_stale=2)
        for name in ("a", "b", "c", "d"):
            table.set_definition(name, Definition(name))

        table.remove_definition("a")
        table.remove_definition("b")
        assert table.stale_prefix_entries == 2  # 2 stale vs 2 live: not yet

        table.remove_definition("c")
        assert table.stale_prefix_entries == 0
        assert set(table.find_with_prefix("")) == {"d"}

    def test_min_stale_holds_off_compaction(self) -> None:
        table = _table(prefix_compaction_ratio=0.1, prefix_compaction_min_stale=10)
        table.set_definition("a", Definition("a"))
        table.set_definition("b", Definition("b"))
        table.remove_definition("a")

        assert table.stale_prefix_entries == 1


class TestLoad:
    def test_load_rebuilds_derived_views(self) -> None:
        table = _table()
        table.set_definition("old", Definition("old"))

        table.load(
            {
                "App\\User": Definition("App\\User"),
                "App\\User::save()": Definition("App\\User::save()"),
                "User": Definition("User", is_global=True),
            }
        )

        assert "old" not in table
        assert table.stale_prefix_entries == 0
        assert set(table.get_global_definitions()) == {"User"}
        assert set(table.get_definitions_for_scope("App\\User")) == {"App\\User", "App\\User::save()"}
        assert set(table.find_with_prefix("App\\")) == {"App\\User", "App\\User::save()"}

    def test_rebuild_without_shuffle(self) -> None:
        table = _table(shuffle_on_rebuild=False)
        for name in ("x1", "x2", "y"):
            table.set_definition(name, Definition(name))

        table.rebuild_prefix_index()

        assert set(table.find_with_prefix("x")) == {"x1", "x2"}
