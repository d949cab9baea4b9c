"""Tests for the reference table."""

from symdex.index._internal.references import ReferenceTable


class TestReferenceTable:
    def test_add_twice_keeps_one(self) -> None:
        table = ReferenceTable()

        assert table.add_reference_uri("A", "file:///a.php") is True
        assert table.add_reference_uri("A", "file:///a.php") is False

        assert table.get_reference_uris("A") == {"file:///a.php"}

    def test_remove_is_idempotent(self) -> None:
        table = ReferenceTable()
        table.add_reference_uri("A", "file:///a.php")
        table.add_reference_uri("A", "file:///b.php")

        table.remove_reference_uri("A", "file:///a.php")
        table.remove_reference_uri("A", "file:///a.php")

        assert table.get_reference_uris("A") == {"file:///b.php"}

    def test_remove_unknown_symbol_or_uri_is_noop(self) -> None:
        table = ReferenceTable()
        table.add_reference_uri("A", "file:///a.php")

        table.remove_reference_uri("B", "file:///a.php")
        table.remove_reference_uri("A", "file:///zzz.php")

        assert table.get_all_references() == {"A": {"file:///a.php"}}

    def test_removing_last_uri_drops_symbol(self) -> None:
        table = ReferenceTable()
        table.add_reference_uri("A", "file:///a.php")

        table.remove_reference_uri("A", "file:///a.php")

        assert len(table) == 0
        assert table.get_reference_uris("A") == set()

    def test_drop_symbol(self) -> None:
        table = ReferenceTable({"A": {"u1", "u2"}, "B": {"u1"}})

        table.drop_symbol("A")

        assert table.get_all_references() == {"B": {"u1"}}

    def test_returned_sets_are_copies(self) -> None:
        table = ReferenceTable()
        table.add_reference_uri("A", "u")

        table.get_reference_uris("A").add("other")
        table.get_all_references()["A"].add("other")

        assert table.get_reference_uris("A") == {"u"}

    def test_constructor_skips_empty_sets(self) -> None:
        table = ReferenceTable({"A": set(), "B": {"u"}})
        assert table.get_all_references() == {"B": {"u"}}
