"""Textual integration for mutatex. Opt-in — requires textual.

Store observers that touch widgets are guarded here, not at callsites:
they are skipped while the app is not running or is paused, and NoMatches
from widget queries is ignored. Core mutatex stays Textual-agnostic.
"""

import logging
from contextlib import contextmanager

from textual.css.query import NoMatches

from mutatex._registry import Unsubscribe

logger = logging.getLogger("mutatex.textual")

# Keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded observers during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def subscribe(app, store, fn, *, fire_immediately=False) -> Unsubscribe:
    """store.subscribe() that safely bridges to Textual widgets.

    fn receives the store's current state after each mutation. Calls are
    skipped while the app is not safe to query.

    Usage:
        unsubscribe = stx.subscribe(
            app, store, lambda s: app.query_one("#count").update(str(s["count"]))
        )
    """

    def _guarded():
        if not is_safe(app):
            return
        try:
            fn(store.get_state())
        except NoMatches:
            logger.debug("Widget query found no match, skipping update")

    unsubscribe = store.subscribe(_guarded)
    if fire_immediately:
        _guarded()
    return unsubscribe
