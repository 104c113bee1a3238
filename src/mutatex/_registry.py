"""Observer registry — ordered list of zero-argument callbacks.

Duplicates are allowed; each subscribe() gets its own unsubscribe closure.
Notification passes iterate a snapshot, so subscribe/unsubscribe calls made
by an observer only affect later passes.
"""

from __future__ import annotations

from typing import Callable

Observer = Callable[[], None]
Unsubscribe = Callable[[], None]


class ObserverRegistry:
    """Ordered observer list owned by a single Store."""

    __slots__ = ("_observers",)

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add(self, observer: Observer) -> Unsubscribe:
        """Append observer. Returns an idempotent function that removes it."""
        self._observers.append(observer)
        subscribed = True

        def _unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self._remove_first(observer)

        return _unsubscribe

    def _remove_first(self, observer: Observer) -> None:
        # Identity, not ==: callable objects may define their own equality.
        for index, entry in enumerate(self._observers):
            if entry is observer:
                del self._observers[index]
                return

    def snapshot(self) -> tuple[Observer, ...]:
        """Immutable copy of the current observers, in subscription order."""
        return tuple(self._observers)

    def __len__(self) -> int:
        return len(self._observers)
