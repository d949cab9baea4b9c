"""Tests for the completeness lifecycle."""

from symdex.index._internal.completion import CompletionState
from symdex.index.models import Completeness, IndexEventKind


class TestCompletionState:
    def test_starts_partial(self) -> None:
        state = CompletionState()
        assert state.state is Completeness.PARTIAL
        assert not state.is_static_complete
        assert not state.is_complete

    def test_mark_static_complete(self) -> None:
        state = CompletionState()

        assert state.mark_static_complete() == [IndexEventKind.STATIC_COMPLETE]
        assert state.is_static_complete
        assert not state.is_complete

    def test_mark_static_complete_is_idempotent(self) -> None:
        state = CompletionState()
        state.mark_static_complete()

        assert state.mark_static_complete() == []

    def test_mark_complete_auto_promotes_static(self) -> None:
        state = CompletionState()

        assert state.mark_complete() == [IndexEventKind.STATIC_COMPLETE, IndexEventKind.COMPLETE]
        assert state.is_static_complete
        assert state.is_complete

    def test_mark_complete_after_static_emits_complete_only(self) -> None:
        state = CompletionState()
        state.mark_static_complete()

        assert state.mark_complete() == [IndexEventKind.COMPLETE]

    def test_no_backward_transition(self) -> None:
        state = CompletionState()
        state.mark_complete()

        assert state.mark_static_complete() == []
        assert state.mark_complete() == []
        assert state.state is Completeness.COMPLETE

    def test_from_flags(self) -> None:
        assert CompletionState.from_flags(static_complete=False, complete=False).state is Completeness.PARTIAL
        assert (
            CompletionState.from_flags(static_complete=True, complete=False).state is Completeness.STATIC_COMPLETE
        )
        assert CompletionState.from_flags(static_complete=True, complete=True).state is Completeness.COMPLETE
