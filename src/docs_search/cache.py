"""Time-to-live cache holding the most recently built search index."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from docs_search.models import BuildResult, SearchIndex

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class IndexBuilder(Protocol):
    """Anything that can build a fresh index."""

    def build(self) -> BuildResult:
        """Build and return a new index."""
        ...


@dataclass(frozen=True)
class _Snapshot:
    result: BuildResult
    built_at: float


class IndexCache:
    """Serves a cached SearchIndex, rebuilding it once it is older than the TTL.

    The cached snapshot is replaced with a single attribute assignment, so
    readers always see either the old or the new index and are never
    blocked by a rebuild. Two callers finding the cache stale at the same
    time may both rebuild; the last one to finish wins.
    """

    def __init__(
        self,
        builder: IndexBuilder,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialise an empty cache.

        Args:
            builder: Builds a new index on a cache miss.
            ttl: Maximum age of the cached index, in seconds.
            clock: Returns the current time in seconds.
        """
        self.builder = builder
        self.ttl = ttl
        self.clock = clock
        self._snapshot: _Snapshot | None = None

    @property
    def built_at(self) -> float | None:
        """Time the cached index was built, or None if nothing is cached."""
        snapshot = self._snapshot
        return snapshot.built_at if snapshot else None

    @property
    def last_build(self) -> BuildResult | None:
        """The cached build result including its diagnostics."""
        snapshot = self._snapshot
        return snapshot.result if snapshot else None

    def is_stale(self, now: float) -> bool:
        """Return True if the cache must be rebuilt at time ``now``."""
        snapshot = self._snapshot
        return snapshot is None or now - snapshot.built_at > self.ttl

    def get_or_build(self, now: float | None = None) -> SearchIndex:
        """Return the cached index, rebuilding it first if it is stale.

        Args:
            now: Current time in seconds, read from the clock if omitted.

        Returns:
            The current SearchIndex.
        """
        if now is None:
            now = self.clock()

        snapshot = self._snapshot
        if snapshot is not None and now - snapshot.built_at <= self.ttl:
            return snapshot.result.index

        logger.info("Search index %s, rebuilding", "missing" if snapshot is None else "expired")
        result = self.builder.build()
        self._snapshot = _Snapshot(result=result, built_at=now)
        return result.index

    def invalidate(self) -> None:
        """Drop the cached index so the next request rebuilds it."""
        self._snapshot = None
