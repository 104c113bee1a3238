"""Store — a single state tree with one mutation entry point.

The only way to change the state is mutate(): reducers run in sequence,
the final result is committed, then every observer is called once.
Observers receive nothing; they call get_state() to read the new value.

Reentrancy: mutate() from inside a reducer raises ReentrantMutationError.
mutate() from inside an observer is allowed and runs as a nested call with
its own commit and notification pass.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from mutatex._registry import Observer, ObserverRegistry, Unsubscribe
from mutatex.exceptions import (
    InvalidMutationArgument,
    InvalidObserver,
    ReentrantMutationError,
)

logger = logging.getLogger("mutatex.store")

S = TypeVar("S")

Reducer = Callable[[S], S]


class _Unset:
    """Type of UNSET, the seed of a store created without initial state."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


class Store(Generic[S]):
    """Holds the state tree. Change it with mutate(), watch it with subscribe()."""

    __slots__ = ("_state", "_registry", "_reducing", "_notify_depth", "_name")

    def __init__(self, initial_state: S = UNSET, *, name: str | None = None) -> None:
        self._state = initial_state
        self._registry = ObserverRegistry()
        self._reducing = False
        self._notify_depth = 0
        self._name = name

    @property
    def _label(self) -> str:
        return self._name if self._name is not None else f"store@{id(self):#x}"

    @property
    def is_reducing(self) -> bool:
        """True while mutate() is running reducers and nothing is committed yet."""
        return self._reducing

    @property
    def observer_count(self) -> int:
        """Number of subscribed observers. Useful for testing."""
        return len(self._registry)

    def get_state(self) -> S:
        """Read the current state tree. No copy is made."""
        return self._state

    def subscribe(self, observer: Observer) -> Unsubscribe:
        """Register observer to run after every mutate().

        Returns a function that removes this subscription. Calling it more
        than once does nothing.
        """
        if not callable(observer):
            raise InvalidObserver(observer)
        unsubscribe = self._registry.add(observer)
        logger.debug("%s: observer subscribed (%d total)", self._label, len(self._registry))

        def _unsubscribe() -> None:
            before = len(self._registry)
            unsubscribe()
            if len(self._registry) != before:
                logger.debug(
                    "%s: observer unsubscribed (%d total)", self._label, len(self._registry)
                )

        return _unsubscribe

    def mutate(self, *reducers: Reducer[S]) -> S:
        """Run reducers left to right, commit the result, notify observers.

        The first reducer gets the current state, each next one gets the
        previous one's return value. Observers are notified once, after the
        final state is committed, in subscription order.

        Usage:
            store = create_store({"count": 0})
            store.mutate(lambda s: {"count": s["count"] + 1})
            # {"count": 1}
        """
        bad = [i for i, reducer in enumerate(reducers) if not callable(reducer)]
        if bad:
            logger.warning("%s: rejected mutation, not callable at %s", self._label, bad)
            raise InvalidMutationArgument(bad)
        if self._reducing:
            logger.warning("%s: mutate() called from inside a reducer", self._label)
            raise ReentrantMutationError(
                f"{self._label}: reducers may not call mutate() on the store they reduce."
            )
        if self._notify_depth:
            logger.debug("%s: nested mutation from an observer", self._label)

        self._reducing = True
        try:
            state = self.get_state()
            for reducer in reducers:
                state = reducer(state)
        finally:
            self._reducing = False

        self._state = state
        observers = self._registry.snapshot()
        logger.debug(
            "%s: committed after %d reducer(s), notifying %d observer(s)",
            self._label, len(reducers), len(observers),
        )

        self._notify_depth += 1
        try:
            for observer in observers:
                observer()
        finally:
            self._notify_depth -= 1
        # Latest commit, which includes any nested mutate() from an observer.
        return self._state

    def __repr__(self) -> str:
        return f"Store({self._label}, state={self._state!r}, observers={len(self._registry)})"


def create_store(initial_state: S = UNSET, *, name: str | None = None) -> Store[S]:
    """Create an independent store seeded with initial_state.

    Without a seed the state is UNSET until the first mutate().

    Usage:
        store = create_store([])
        unsubscribe = store.subscribe(lambda: print(store.get_state()))
        store.mutate(lambda s: s + ["a"], lambda s: s + ["b"])
        # prints ['a', 'b'] once
        unsubscribe()
    """
    return Store(initial_state, name=name)
