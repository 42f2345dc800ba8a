"""Builds the in-memory search index from the documentation catalog."""

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from docs_search.catalog import DEFAULT_CATALOG
from docs_search.errors import DocumentNotFoundError, DocumentUnreadableError
from docs_search.models import BuildResult, CatalogEntry, IndexedItem, SearchIndex, SkippedEntry
from docs_search.parser import ContentExtractor
from docs_search.source import DocumentSource

logger = logging.getLogger(__name__)

EXAMPLES_SECTION = "examples"

ROOT_ENTRY = CatalogEntry(href="/docs", title="Documentation", slug=())


class SearchIndexBuilder:
    """Reads every cataloged page and assembles a SearchIndex.

    A page that cannot be read or yields no text is skipped with a
    diagnostic; the build itself never fails because of a single page.
    """

    def __init__(
        self,
        source: DocumentSource,
        catalog: Sequence[CatalogEntry] = DEFAULT_CATALOG,
        extractor: ContentExtractor | None = None,
        max_workers: int = 1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialise builder with its collaborators.

        Args:
            source: Where raw documents are read from.
            catalog: Ordered catalog of pages to index.
            extractor: Content extractor, a default one if omitted.
            max_workers: Number of concurrent document reads.
            clock: Returns the wall-clock time recorded on each index.
        """
        self.source = source
        self.catalog = tuple(catalog)
        self.extractor = extractor or ContentExtractor()
        self.max_workers = max(1, max_workers)
        self.clock = clock

    def build(self) -> BuildResult:
        """Build a fresh index from the catalog plus the root page.

        Returns:
            BuildResult holding the index and any skipped-entry diagnostics.
        """
        entries = self.catalog
        if all(entry.href != ROOT_ENTRY.href for entry in entries):
            entries = (*entries, ROOT_ENTRY)
        sources = self._read_all(entries)

        items: list[IndexedItem] = []
        skipped: list[SkippedEntry] = []

        for entry, (raw, error) in zip(entries, sources, strict=True):
            if error is not None:
                # A missing root page is simply left out
                if entry is ROOT_ENTRY and isinstance(error, DocumentNotFoundError):
                    logger.debug("No root document found for %s", entry.href)
                    continue
                logger.warning("Could not index %s: %s", entry.href, error)
                skipped.append(SkippedEntry(href=entry.href, reason=str(error)))
                continue

            content = self._extract_content(entry, raw)
            if not content:
                logger.warning("Skipping %s: empty content after extraction", entry.href)
                skipped.append(SkippedEntry(href=entry.href, reason="empty content after extraction"))
                continue

            items.append(IndexedItem(href=entry.href, title=entry.title, slug=entry.slug, content=content))
            logger.debug("Indexed: %s", entry.href)

        logger.info("Built search index with %d documents (%d skipped)", len(items), len(skipped))
        index = SearchIndex(items=tuple(items), built_at=self.clock())
        return BuildResult(index=index, skipped=tuple(skipped))

    def _read_all(
        self, entries: Sequence[CatalogEntry]
    ) -> list[tuple[str, None] | tuple[None, DocumentUnreadableError]]:
        """Read every entry's source, concurrently when configured.

        Args:
            entries: Entries to read.

        Returns:
            One ``(raw, error)`` pair per entry, in entry order.
        """
        if self.max_workers == 1:
            return [self._read(entry) for entry in entries]

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="docs-index") as executor:
            return list(executor.map(self._read, entries))

    def _read(self, entry: CatalogEntry) -> tuple[str, None] | tuple[None, DocumentUnreadableError]:
        """Read one entry, capturing a read failure instead of raising it.

        Args:
            entry: Catalog entry to read.

        Returns:
            ``(raw, None)`` on success or ``(None, error)`` on failure.
        """
        try:
            return self.source.read(entry.slug), None
        except DocumentUnreadableError as e:
            return None, e

    def _extract_content(self, entry: CatalogEntry, raw: str) -> str:
        """Extract indexable content, falling back for example pages.

        Example pages are often nothing but code, so when their body yields
        no text the heading lines, or failing that the title, are used.

        Args:
            entry: Catalog entry being indexed.
            raw: Raw document source.

        Returns:
            Content for the index, empty if the page should be skipped.
        """
        content = self.extractor.extract_text(raw)
        if content or entry.section != EXAMPLES_SECTION:
            return content

        logger.debug("Using heading fallback for %s", entry.href)
        return self.extractor.extract_headings(raw) or entry.title
