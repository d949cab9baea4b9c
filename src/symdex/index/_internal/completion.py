"""Partial -> StaticComplete -> Complete lifecycle of an index."""

from __future__ import annotations

from symdex.index.models import Completeness, IndexEventKind


class CompletionState:
    """Monotonic completeness tracker.

    The ``mark_*`` methods return the notifications the transition produced,
    in the order they must be delivered. Re-marking an already reached state
    produces nothing.
    """

    def __init__(self, state: Completeness = Completeness.PARTIAL) -> None:
        self._state = state

    @classmethod
    def from_flags(cls, *, static_complete: bool, complete: bool) -> CompletionState:
        if complete:
            return cls(Completeness.COMPLETE)
        if static_complete:
            return cls(Completeness.STATIC_COMPLETE)
        return cls()

    @property
    def state(self) -> Completeness:
        return self._state

    @property
    def is_static_complete(self) -> bool:
        return self._state >= Completeness.STATIC_COMPLETE

    @property
    def is_complete(self) -> bool:
        return self._state >= Completeness.COMPLETE

    def mark_static_complete(self) -> list[IndexEventKind]:
        if self.is_static_complete:
            return []
        self._state = Completeness.STATIC_COMPLETE
        return [IndexEventKind.STATIC_COMPLETE]

    def mark_complete(self) -> list[IndexEventKind]:
        if self.is_complete:
            return []
        emitted = self.mark_static_complete()
        self._state = Completeness.COMPLETE
        emitted.append(IndexEventKind.COMPLETE)
        return emitted
