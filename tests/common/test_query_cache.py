from __future__ import annotations

import threading

import pytest

from src.staff_hub.staff_hub.common.query_cache import QueryCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_fresh_entries_are_served_without_refetching():
    clock = FakeClock()
    cache = QueryCache(stale_seconds=30, clock=clock)
    calls = []

    def fetch():
        calls.append(1)
        return len(calls)

    assert cache.get_or_fetch(("shifts",), fetch) == 1
    clock.now = 29.9
    assert cache.get_or_fetch(("shifts",), fetch) == 1
    clock.now = 30.0
    assert cache.get_or_fetch(("shifts",), fetch) == 2


def test_zero_window_always_refetches():
    cache = QueryCache(stale_seconds=0)
    calls = []

    cache.get_or_fetch(("employees",), lambda: calls.append(1))
    cache.get_or_fetch(("employees",), lambda: calls.append(1))

    assert len(calls) == 2


def test_concurrent_readers_share_one_fetch():
    cache = QueryCache(stale_seconds=30)
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_fetch():
        calls.append(1)
        started.set()
        release.wait(timeout=5)
        return ["E1", "E2"]

    results = []

    def reader():
        results.append(cache.get_or_fetch(("employees",), slow_fetch))

    first = threading.Thread(target=reader)
    first.start()
    assert started.wait(timeout=5)

    others = [threading.Thread(target=reader) for _ in range(4)]
    for t in others:
        t.start()
    release.set()
    for t in [first, *others]:
        t.join(timeout=5)

    assert len(calls) == 1
    assert results == [["E1", "E2"]] * 5


def test_invalidate_drops_every_key_under_the_prefix():
    cache = QueryCache(stale_seconds=30)
    cache.get_or_fetch(("shifts",), lambda: "all")
    cache.get_or_fetch(("shifts", "employee", "E1"), lambda: "mine")
    cache.get_or_fetch(("employees",), lambda: "people")

    assert cache.invalidate("shifts") == 2

    assert cache.peek(("shifts",)) is None
    assert cache.peek(("shifts", "employee", "E1")) is None
    assert cache.peek(("employees",)) == "people"


def test_result_of_a_fetch_superseded_by_invalidation_is_not_stored():
    cache = QueryCache(stale_seconds=30)
    started = threading.Event()
    release = threading.Event()
    results = []

    def stale_fetch():
        started.set()
        release.wait(timeout=5)
        return "before-write"

    reader = threading.Thread(target=lambda: results.append(cache.get_or_fetch(("shifts",), stale_fetch)))
    reader.start()
    assert started.wait(timeout=5)

    cache.invalidate("shifts")
    release.set()
    reader.join(timeout=5)

    assert results == ["before-write"]
    assert cache.peek(("shifts",)) is None
    assert cache.get_or_fetch(("shifts",), lambda: "after-write") == "after-write"


def test_failed_fetches_are_not_cached():
    cache = QueryCache(stale_seconds=30)

    def boom():
        raise ConnectionError("database unavailable")

    with pytest.raises(ConnectionError):
        cache.get_or_fetch(("employees",), boom)

    assert cache.get_or_fetch(("employees",), lambda: "ok") == "ok"


def test_instances_do_not_share_entries():
    a = QueryCache(stale_seconds=30)
    b = QueryCache(stale_seconds=30)
    a.get_or_fetch(("employees",), lambda: "from-a")

    assert b.peek(("employees",)) is None
