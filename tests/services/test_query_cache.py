# -*- coding: utf-8 -*-
"""
Tests for the query cache.

Tests cover:
- Keys and de-duplication
- Tag invalidation and refetch of observed entries
- Refetch on focus
- Reset dropping late results
"""

import time

import pytest

from services.query_cache import QueryCache, QueryEndpoint, QueryStatus


class Backend:
    def __init__(self):
        self.calls = []
        self.value = "v1"

    def fetch(self, class_id):
        self.calls.append(class_id)
        return {"classId": class_id, "value": self.value}


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def options_cache(cache, backend):
    cache.register(QueryEndpoint(
        "options",
        backend.fetch,
        provides=lambda data, args: ("Options", f"Options:{args['class_id']}"),
        transform=lambda raw: raw["value"],
    ))
    return cache


class TestQueries:
    """Reads, keys and de-duplication."""

    def test_key_is_stable(self):
        assert QueryCache.make_key("options", b=2, a=1) == QueryCache.make_key("options", a=1, b=2)
        assert QueryCache.make_key("options", a=1) != QueryCache.make_key("options", a=2)

    def test_unknown_endpoint(self, cache):
        with pytest.raises(KeyError):
            cache.query("missing")

    def test_loading_then_success(self, options_cache, runner):
        key = options_cache.query("options", class_id=1)
        state = options_cache.state(key)
        assert state.status is QueryStatus.LOADING and state.is_loading

        runner.complete_all()

        state = options_cache.state(key)
        assert state.status is QueryStatus.SUCCESS
        assert state.data == "v1"
        assert not state.is_loading

    def test_in_flight_requests_are_shared(self, options_cache, runner, backend):
        options_cache.query("options", class_id=1)
        options_cache.query("options", class_id=1)
        options_cache.subscribe("options", class_id=1)

        assert len(runner.pending) == 1
        runner.complete_all()
        assert backend.calls == [1]

    def test_fresh_entry_is_a_hit(self, options_cache, runner, backend):
        options_cache.query("options", class_id=1)
        runner.complete_all()

        options_cache.query("options", class_id=1)

        assert runner.pending == []
        assert options_cache.hits == 1

    def test_expired_entry_is_refetched(self, qapp, runner, backend, monkeypatch):
        cache = QueryCache(runner, ttl_seconds=60)
        cache.register(QueryEndpoint("options", backend.fetch))
        cache.query("options", class_id=1)
        runner.complete_all()
        later = time.monotonic() + 120
        monkeypatch.setattr("services.query_cache.time.monotonic", lambda: later)

        cache.query("options", class_id=1)

        assert len(runner.pending) == 1

    def test_error_state(self, cache, runner):
        def failing():
            raise RuntimeError("boom")
        cache.register(QueryEndpoint("broken", failing))

        key = cache.query("broken")
        runner.complete_all()

        state = cache.state(key)
        assert state.is_error
        assert isinstance(state.error, RuntimeError)

    def test_updates_are_signalled(self, qtbot, options_cache, runner):
        key = options_cache.query("options", class_id=1)
        with qtbot.waitSignal(options_cache.query_updated) as blocker:
            runner.complete_all()
        assert blocker.args[0] == key


class TestInvalidation:
    """Tag invalidation."""

    @pytest.mark.parametrize("invalidated,provided,expected", [
        ("Options", "Options", True),
        ("Options", "Options:3", True),
        ("Options:3", "Options:3", True),
        ("Options:3", "Options:4", False),
        ("Options:3", "Options", False),
        ("Option", "Options", False),
    ])
    def test_tag_matching(self, invalidated, provided, expected):
        assert QueryCache.tag_matches(invalidated, provided) is expected

    def test_subscribed_entry_is_refetched(self, options_cache, runner, backend):
        key = options_cache.subscribe("options", class_id=1)
        runner.complete_all()
        backend.value = "v2"

        assert options_cache.invalidate_tags(["Options:1"]) == [key]
        state = options_cache.state(key)
        assert state.data == "v1" and state.is_fetching

        runner.complete_all()
        assert options_cache.state(key).data == "v2"

    def test_unobserved_entry_is_dropped(self, options_cache, runner):
        key = options_cache.query("options", class_id=1)
        runner.complete_all()

        options_cache.invalidate_tags(["Options"])

        assert key not in options_cache.keys()
        assert runner.pending == []

    def test_other_ids_untouched(self, options_cache, runner):
        one = options_cache.subscribe("options", class_id=1)
        two = options_cache.subscribe("options", class_id=2)
        runner.complete_all()

        assert options_cache.invalidate_tags(["Options:2"]) == [two]
        assert not options_cache.state(one).is_fetching

    def test_unsubscribed_entry_not_refetched(self, options_cache, runner):
        key = options_cache.subscribe("options", class_id=1)
        runner.complete_all()
        options_cache.unsubscribe(key)

        options_cache.invalidate_tags(["Options"])

        assert runner.pending == []

    def test_refetch_on_focus(self, options_cache, runner):
        options_cache.subscribe("options", class_id=1)
        options_cache.query("options", class_id=2)
        runner.complete_all()

        assert options_cache.refetch_on_focus() == 1
        assert len(runner.pending) == 1


class TestReset:
    def test_reset_drops_late_results(self, options_cache, runner):
        key = options_cache.subscribe("options", class_id=1)

        options_cache.reset()
        runner.complete_all()

        assert options_cache.keys() == []
        assert options_cache.state(key).status is QueryStatus.IDLE



class TestExpiry:
    """TTL semantics and eviction of unobserved entries."""

    def _cache(self, runner, backend, ttl):
        cache = QueryCache(runner, ttl_seconds=ttl)
        cache.register(QueryEndpoint("options", backend.fetch))
        return cache

    def test_zero_ttl_refetches_every_query(self, qapp, runner, backend):
        cache = self._cache(runner, backend, 0)
        cache.query("options", class_id=1)
        runner.complete_all()

        cache.query("options", class_id=1)

        assert len(runner.pending) == 1
        assert cache.hits == 0

    def test_none_ttl_never_expires(self, qapp, runner, backend, monkeypatch):
        cache = self._cache(runner, backend, None)
        cache.query("options", class_id=1)
        runner.complete_all()
        later = time.monotonic() + 10 ** 6
        monkeypatch.setattr("services.query_cache.time.monotonic", lambda: later)

        cache.query("options", class_id=1)

        assert runner.pending == []

    def test_default_ttl_from_config(self, qapp, runner):
        from app.config import Config
        assert QueryCache(runner).ttl_seconds == Config.QUERY_CACHE_TTL_SECONDS

    def test_expired_entries_evicted_on_unsubscribe(self, qapp, runner, backend, monkeypatch):
        cache = self._cache(runner, backend, 60)
        old = cache.subscribe("options", class_id=1)
        runner.complete_all()
        cache.unsubscribe(old)
        assert old in cache.keys()

        later = time.monotonic() + 120
        monkeypatch.setattr("services.query_cache.time.monotonic", lambda: later)
        current = cache.subscribe("options", class_id=2)
        runner.complete_all()
        cache.unsubscribe(current)

        assert old not in cache.keys()
        assert current in cache.keys()

    def test_observed_entries_are_kept(self, qapp, runner, backend, monkeypatch):
        cache = self._cache(runner, backend, 60)
        watched = cache.subscribe("options", class_id=1)
        other = cache.subscribe("options", class_id=2)
        runner.complete_all()
        later = time.monotonic() + 120
        monkeypatch.setattr("services.query_cache.time.monotonic", lambda: later)

        cache.unsubscribe(other)

        assert cache.keys() == [watched]

    def test_failed_unobserved_entry_is_evicted(self, cache, runner):
        def failing():
            raise RuntimeError("boom")
        cache.register(QueryEndpoint("broken", failing))
        key = cache.subscribe("broken")
        runner.complete_all()

        cache.unsubscribe(key)

        assert key not in cache.keys()
