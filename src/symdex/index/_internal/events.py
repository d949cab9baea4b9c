"""Synchronous listener registry for index notifications.

Listeners run in registration order on the thread that performed the
mutation. A listener must not mutate the index that notified it. Listener
exceptions propagate to the caller that triggered the notification.
"""

from __future__ import annotations

from symdex.index.models import IndexEvent, IndexEventKind, Listener


class EventEmitter:
    def __init__(self) -> None:
        self._listeners: dict[IndexEventKind, list[Listener]] = {}

    def subscribe(self, kind: IndexEventKind, listener: Listener) -> None:
        self._listeners.setdefault(kind, []).append(listener)

    def unsubscribe(self, kind: IndexEventKind, listener: Listener) -> bool:
        """Remove the earliest registration of ``listener``. False if not registered."""
        listeners = self._listeners.get(kind)
        if not listeners or listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[kind]
        return True

    def has_listeners(self, kind: IndexEventKind) -> bool:
        return kind in self._listeners

    def emit(self, event: IndexEvent) -> None:
        listeners = self._listeners.get(event.kind)
        if not listeners:
            return
        # Snapshot so (un)subscribing from a listener doesn't disturb this round
        for listener in tuple(listeners):
            listener(event)
