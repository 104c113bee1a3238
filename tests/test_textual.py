"""Tests for mutatex.textual — Textual integration layer."""

import logging

import pytest
from textual.css.query import NoMatches

from mutatex import create_store
from mutatex import textual as stx


class _MockApp:
    """Minimal mock matching the Textual App interface stx needs."""

    def __init__(self, *, is_running=True):
        self.is_running = is_running


class TestSubscribe:
    def test_skips_when_not_running(self):
        app = _MockApp(is_running=False)
        store = create_store(1)
        effects = []
        stx.subscribe(app, store, lambda s: effects.append(s))
        store.mutate(lambda s: 2)
        assert effects == []

    def test_skips_during_pause(self):
        app = _MockApp()
        store = create_store(1)
        effects = []
        stx.subscribe(app, store, lambda s: effects.append(s))
        with stx.pause(app):
            store.mutate(lambda s: 2)
        assert effects == []
        store.mutate(lambda s: 3)
        assert effects == [3]

    def test_fires_with_current_state(self):
        app = _MockApp()
        store = create_store({"count": 0})
        effects = []
        stx.subscribe(app, store, lambda s: effects.append(s["count"]))
        store.mutate(lambda s: {"count": s["count"] + 1})
        assert effects == [1]

    def test_fire_immediately(self):
        app = _MockApp()
        store = create_store("ready")
        effects = []
        stx.subscribe(app, store, lambda s: effects.append(s), fire_immediately=True)
        assert effects == ["ready"]

    def test_catches_nomatch(self, caplog):
        """NoMatches from widget queries is swallowed and logged at debug."""
        app = _MockApp()
        store = create_store(1)
        after = []

        def _raise_nomatch(s):
            raise NoMatches("StatusFooter")

        stx.subscribe(app, store, _raise_nomatch)
        store.subscribe(lambda: after.append(store.get_state()))
        with caplog.at_level(logging.DEBUG, logger="mutatex.textual"):
            store.mutate(lambda s: 2)  # should not raise
        assert after == [2]
        assert "no match" in caplog.text

    def test_propagates_real_errors(self):
        """Non-NoMatches exceptions propagate normally."""
        app = _MockApp()
        store = create_store(1)

        def _raise_value_error(s):
            raise ValueError("boom")

        stx.subscribe(app, store, _raise_value_error)
        with pytest.raises(ValueError, match="boom"):
            store.mutate(lambda s: 2)
        assert store.get_state() == 2

    def test_unsubscribe_stops_updates(self):
        app = _MockApp()
        store = create_store(1)
        effects = []
        unsub = stx.subscribe(app, store, lambda s: effects.append(s))
        store.mutate(lambda s: 2)
        unsub()
        unsub()
        store.mutate(lambda s: 3)
        assert effects == [2]
        assert store.observer_count == 0


class TestPause:
    def test_pause_restores_on_exception(self):
        app = _MockApp()
        assert stx.is_safe(app)

        with pytest.raises(RuntimeError):
            with stx.pause(app):
                assert not stx.is_safe(app)
                raise RuntimeError("oops")

        # Restored despite exception
        assert stx.is_safe(app)

    def test_pause_does_not_mutate_app(self):
        """Pause state lives in the module, not on the app."""
        app = _MockApp()
        attrs_before = set(vars(app))
        with stx.pause(app):
            attrs_during = set(vars(app))
        attrs_after = set(vars(app))
        assert attrs_before == attrs_during
        assert attrs_before == attrs_after

    def test_multiple_apps_independent(self):
        """Pausing one app does not affect another."""
        app_a = _MockApp()
        app_b = _MockApp()
        with stx.pause(app_a):
            assert not stx.is_safe(app_a)
            assert stx.is_safe(app_b)
