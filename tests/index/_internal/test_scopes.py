"""Tests for scope key extraction and the scope directory."""

import pytest

from symdex.index._internal.scopes import ScopeDirectory, scope_key
from symdex.index.models import Definition


class TestScopeKey:
    @pytest.mark.parametrize(
        ("fqn", "expected"),
        [
            ("App\\User::save()", "App\\User"),
            ("App\\User::TABLE", "App\\User"),
            ("App\\User->name", "App\\User"),
            ("App\\User", "App\\User"),
            ("strlen()", "strlen()"),
        ],
    )
    def test_owner_portion(self, fqn: str, expected: str) -> None:
        assert scope_key(fqn) == expected

    def test_static_operator_checked_before_instance_operator(self) -> None:
        # "::" occurs, so it wins even though "->" appears earlier
        assert scope_key("A->b::c") == "A->b"

    def test_first_occurrence_of_operator_used(self) -> None:
        assert scope_key("A::b::c") == "A"


class TestScopeDirectory:
    def test_members_grouped_under_owner(self) -> None:
        directory: ScopeDirectory[Definition] = ScopeDirectory()
        save = Definition("App\\User::save()")
        name = Definition("App\\User->name")
        directory.add_to_scope(save.fqn, save)
        directory.add_to_scope(name.fqn, name)

        assert directory.get_scope("App\\User") == {save.fqn: save, name.fqn: name}
        assert len(directory) == 1

    def test_empty_group_pruned(self) -> None:
        directory: ScopeDirectory[Definition] = ScopeDirectory()
        directory.add_to_scope("A::x", Definition("A::x"))

        directory.remove_from_scope("A::x")

        assert "A" not in directory
        assert directory.get_scope("A") == {}

    def test_remove_unknown_is_noop(self) -> None:
        directory: ScopeDirectory[Definition] = ScopeDirectory()
        directory.add_to_scope("A::x", Definition("A::x"))

        directory.remove_from_scope("A::y")
        directory.remove_from_scope("B::x")

        assert list(directory.get_scope("A")) == ["A::x"]

    def test_get_scope_returns_copy(self) -> None:
        directory: ScopeDirectory[Definition] = ScopeDirectory()
        directory.add_to_scope("A::x", Definition("A::x"))

        directory.get_scope("A").clear()

        assert "A::x" in directory.get_scope("A")
