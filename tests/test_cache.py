"""Tests for the TTL index cache."""

import threading
from unittest.mock import Mock

import pytest

from docs_search.cache import IndexCache
from docs_search.models import BuildResult, SearchIndex

T = 1_000_000.0
MINUTE = 60.0


@pytest.fixture
def builder() -> Mock:
    """Create a mock builder returning a new empty index on each build.

    Returns:
        Mock with a ``build`` method.
    """
    mock = Mock()
    mock.build.side_effect = lambda: BuildResult(index=SearchIndex(items=(), built_at=0.0))
    return mock


@pytest.fixture
def cache(builder: Mock) -> IndexCache:
    """Create an IndexCache over the mock builder.

    Args:
        builder: Mock builder fixture.

    Returns:
        IndexCache with a five minute TTL.
    """
    return IndexCache(builder, ttl=5 * MINUTE)


def test_first_call_builds(cache: IndexCache, builder: Mock) -> None:
    """Test that an empty cache builds on first use."""
    assert cache.built_at is None
    assert cache.last_build is None

    index = cache.get_or_build(now=T)

    assert builder.build.call_count == 1
    assert cache.built_at == T
    assert cache.last_build is not None
    assert cache.last_build.index is index


def test_reuse_within_ttl(cache: IndexCache, builder: Mock) -> None:
    """Test that a query four minutes later reuses the snapshot."""
    first = cache.get_or_build(now=T)
    second = cache.get_or_build(now=T + 4 * MINUTE)

    assert builder.build.call_count == 1
    assert second is first


def test_rebuild_after_ttl(cache: IndexCache, builder: Mock) -> None:
    """Test that a query six minutes later triggers exactly one rebuild."""
    first = cache.get_or_build(now=T)
    second = cache.get_or_build(now=T + 6 * MINUTE)
    third = cache.get_or_build(now=T + 7 * MINUTE)

    assert builder.build.call_count == 2
    assert second is not first
    assert third is second
    assert cache.built_at == T + 6 * MINUTE


def test_exact_ttl_is_still_fresh(cache: IndexCache, builder: Mock) -> None:
    """Test that an index exactly TTL old is reused."""
    cache.get_or_build(now=T)
    cache.get_or_build(now=T + 5 * MINUTE)

    assert builder.build.call_count == 1


def test_is_stale(cache: IndexCache) -> None:
    """Test staleness checks."""
    assert cache.is_stale(T)
    cache.get_or_build(now=T)
    assert not cache.is_stale(T + MINUTE)
    assert cache.is_stale(T + 6 * MINUTE)


def test_uses_clock_when_now_omitted(builder: Mock) -> None:
    """Test that the injected clock supplies the current time."""
    clock = Mock(side_effect=[T, T + MINUTE, T + 10 * MINUTE])
    cache = IndexCache(builder, ttl=5 * MINUTE, clock=clock)

    cache.get_or_build()
    cache.get_or_build()
    cache.get_or_build()

    assert builder.build.call_count == 2
    assert cache.built_at == T + 10 * MINUTE


def test_invalidate(cache: IndexCache, builder: Mock) -> None:
    """Test that invalidate forces the next call to rebuild."""
    cache.get_or_build(now=T)
    cache.invalidate()
    cache.get_or_build(now=T + 1)

    assert builder.build.call_count == 2


def test_failed_rebuild_keeps_previous_snapshot(cache: IndexCache, builder: Mock) -> None:
    """Test that a failing rebuild leaves the old index in place."""
    first = cache.get_or_build(now=T)
    builder.build.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        cache.get_or_build(now=T + 6 * MINUTE)

    assert cache.built_at == T
    assert cache.last_build is not None
    assert cache.last_build.index is first


def test_concurrent_rebuilds_do_not_block() -> None:
    """Test that a second caller is not held up by a rebuild in flight."""
    release = threading.Event()
    slow_build_started = threading.Event()
    calls: list[int] = []
    calls_lock = threading.Lock()

    def build() -> BuildResult:
        with calls_lock:
            calls.append(1)
            call_number = len(calls)
        index = SearchIndex(items=(), built_at=float(call_number))
        # The first rebuild after the initial build waits to be released
        if call_number == 2:
            slow_build_started.set()
            assert release.wait(timeout=5)
        return BuildResult(index=index)

    builder = Mock()
    builder.build.side_effect = build
    cache = IndexCache(builder, ttl=5 * MINUTE)
    initial = cache.get_or_build(now=T)

    results: dict[str, SearchIndex] = {}

    def query(name: str, now: float) -> None:
        results[name] = cache.get_or_build(now=now)

    slow = threading.Thread(target=query, args=("slow", T + 6 * MINUTE))
    slow.start()
    assert slow_build_started.wait(timeout=5)

    # A fresh-enough reader gets the old snapshot while the rebuild is running
    assert cache.get_or_build(now=T + MINUTE) is initial

    fast = threading.Thread(target=query, args=("fast", T + 6 * MINUTE))
    fast.start()
    fast.join(timeout=5)

    assert not fast.is_alive()
    assert slow.is_alive()

    release.set()
    slow.join(timeout=5)

    assert not slow.is_alive()
    assert builder.build.call_count == 3
    assert isinstance(results["slow"], SearchIndex)
    assert isinstance(results["fast"], SearchIndex)
    assert results["slow"] is not results["fast"]
    assert cache._snapshot is not None
    assert cache._snapshot.result.index in (results["slow"], results["fast"])
    # The slow build finished last, so its index wins
    assert cache.last_build is not None
    assert cache.last_build.index is results["slow"]
