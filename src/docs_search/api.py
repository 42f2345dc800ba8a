"""Query API used by the documentation site's search route."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docs_search.cache import IndexCache
from docs_search.catalog import DEFAULT_CATALOG, load_catalog
from docs_search.config import SearchConfig
from docs_search.indexer import SearchIndexBuilder
from docs_search.search import DEFAULT_LIMIT, EXCERPT_LENGTH, search
from docs_search.source import FileDocumentSource

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Search failed"


@dataclass
class SearchResponse:
    """HTTP-shaped response: a status code and a JSON-serialisable payload."""

    status: int
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when the query succeeded."""
        return self.status == 200


class SearchService:
    """Answers search queries against the cached documentation index."""

    def __init__(
        self,
        cache: IndexCache,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = 50,
        excerpt_length: int = EXCERPT_LENGTH,
    ) -> None:
        """Initialise service with an index cache.

        Args:
            cache: Cache serving the current SearchIndex.
            default_limit: Result count used when the caller gives none.
            max_limit: Upper bound on the result count a caller may request.
            excerpt_length: Nominal length of result excerpts.
        """
        self.cache = cache
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.excerpt_length = excerpt_length

    @classmethod
    def from_config(cls, config: SearchConfig) -> "SearchService":
        """Wire the source, builder and cache described by a config.

        Args:
            config: Search configuration.

        Returns:
            Ready-to-use SearchService.
        """
        catalog = load_catalog(Path(config.CATALOG_PATH)) if config.CATALOG_PATH else DEFAULT_CATALOG
        source = FileDocumentSource(Path(config.DOCS_PATH), extension=config.DOCUMENT_EXTENSION)
        builder = SearchIndexBuilder(source, catalog=catalog, max_workers=config.BUILD_WORKERS)
        cache = IndexCache(builder, ttl=config.CACHE_TTL_SECONDS)
        return cls(
            cache,
            default_limit=config.DEFAULT_LIMIT,
            max_limit=config.MAX_LIMIT,
            excerpt_length=config.EXCERPT_LENGTH,
        )

    def query(self, q: str | None, limit: int | None = None) -> SearchResponse:
        """Search the documentation.

        Blank queries return no results without touching the index. Any
        failure while building or scoring is logged and reported as a
        generic error with an empty result list.

        Args:
            q: Free-text query.
            limit: Maximum number of results, the default limit if omitted.

        Returns:
            SearchResponse with ``{"results": [...]}`` or an error payload.
        """
        query = q or ""
        if not query.strip():
            return SearchResponse(status=200, payload={"results": []})

        try:
            index = self.cache.get_or_build()
            results = search(query, index, self._clamp_limit(limit), self.excerpt_length)
        except Exception:
            logger.exception("Search API error for query %r", query)
            return SearchResponse(status=500, payload={"error": SEARCH_FAILED_MESSAGE, "results": []})

        logger.debug("Query %r returned %d results", query, len(results))
        return SearchResponse(status=200, payload={"results": [result.to_dict() for result in results]})

    def _clamp_limit(self, limit: int | None) -> int:
        """Apply the default limit and bound it to [1, max_limit].

        Args:
            limit: Requested result count, or None.

        Returns:
            Result count to search with.
        """
        if limit is None:
            return self.default_limit
        return max(1, min(int(limit), self.max_limit))
