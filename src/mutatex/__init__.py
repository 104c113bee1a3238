"""Mutatex: a single-store, reducer-driven state container for Python."""

from importlib.metadata import version as _version

__version__ = _version("mutatex")

from mutatex._registry import Observer, Unsubscribe
from mutatex.exceptions import (
    MutatexError,
    InvalidMutationArgument,
    InvalidObserver,
    ReentrantMutationError,
)
from mutatex.store import UNSET, Reducer, Store, create_store
# textual NOT auto-imported — opt-in only

__all__ = [
    "Store",
    "create_store",
    "UNSET",
    "Reducer",
    "Observer",
    "Unsubscribe",
    "MutatexError",
    "InvalidMutationArgument",
    "InvalidObserver",
    "ReentrantMutationError",
]
