"""Data models for documentation search."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from docs_search.errors import CatalogError

ROOT_SECTION = "root"


@dataclass(frozen=True)
class CatalogEntry:
    """One indexable documentation page from the docs catalog."""

    href: str
    title: str
    slug: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate the entry once at catalog-load time.

        Raises:
            CatalogError: If the href, title or slug is malformed.
        """
        # Accept lists from JSON but store an immutable tuple
        object.__setattr__(self, "slug", tuple(self.slug))

        if not isinstance(self.href, str) or not self.href.startswith("/"):
            msg = f"Catalog entry href must start with '/': {self.href!r}"
            raise CatalogError(msg)
        if not isinstance(self.title, str) or not self.title.strip():
            msg = f"Catalog entry {self.href} has an empty title"
            raise CatalogError(msg)
        for segment in self.slug:
            if not isinstance(segment, str) or not segment or "/" in segment:
                msg = f"Catalog entry {self.href} has an invalid slug segment: {segment!r}"
                raise CatalogError(msg)

    @property
    def section(self) -> str:
        """Top-level section of the page (first slug segment)."""
        return self.slug[0] if self.slug else ROOT_SECTION


@dataclass(frozen=True)
class IndexedItem:
    """A page whose content has been extracted and is ready for scoring."""

    href: str
    title: str
    slug: tuple[str, ...]
    content: str

    @property
    def section(self) -> str:
        """Top-level section of the page (first slug segment)."""
        return self.slug[0] if self.slug else ROOT_SECTION


@dataclass(frozen=True)
class SkippedEntry:
    """Diagnostic for a catalog entry left out of the index."""

    href: str
    reason: str


@dataclass(frozen=True)
class SearchIndex:
    """Read-only snapshot of indexed pages and the time it was built."""

    items: tuple[IndexedItem, ...]
    built_at: float

    def __len__(self) -> int:
        """Return the number of indexed items."""
        return len(self.items)

    def __iter__(self) -> Iterator[IndexedItem]:
        """Iterate over indexed items in index order."""
        return iter(self.items)

    def get(self, href: str) -> IndexedItem | None:
        """Return the item with the given href, if indexed.

        Args:
            href: Unique page path.

        Returns:
            Matching IndexedItem or None.
        """
        for item in self.items:
            if item.href == href:
                return item
        return None


@dataclass(frozen=True)
class BuildResult:
    """Outcome of an index build: the index plus skipped-entry diagnostics."""

    index: SearchIndex
    skipped: tuple[SkippedEntry, ...] = field(default_factory=tuple)


@dataclass
class SearchResult:
    """Represents a search result."""

    href: str
    title: str
    slug: tuple[str, ...]
    excerpt: str
    score: int

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serialisable form of the result.

        Returns:
            Dictionary with href, title, slug, excerpt and score.
        """
        return {
            "href": self.href,
            "title": self.title,
            "slug": list(self.slug),
            "excerpt": self.excerpt,
            "score": self.score,
        }
