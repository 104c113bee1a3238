"""Exception hierarchy for mutatex."""

from __future__ import annotations


class MutatexError(Exception):
    """Base exception for all mutatex errors."""


class InvalidMutationArgument(MutatexError, TypeError):
    """mutate() received an argument that is not callable.

    Raised before any reducer runs, so the store is left untouched.
    """

    def __init__(self, positions: list[int]) -> None:
        self.positions = positions
        super().__init__(
            f"Mutations must be one or more functions (not callable at positions {positions})."
        )


class InvalidObserver(MutatexError, TypeError):
    """subscribe() received an observer that is not callable."""

    def __init__(self, observer: object) -> None:
        self.observer = observer
        super().__init__(f"Observer must be callable, got {type(observer).__name__}.")


class ReentrantMutationError(MutatexError, RuntimeError):
    """mutate() was called from inside a reducer of the same store."""
