"""Exceptions raised by the documentation search package."""


class DocsSearchError(Exception):
    """Base class for documentation search errors."""


class CatalogError(DocsSearchError):
    """Raised when a catalog entry is malformed or duplicated."""


class DocumentUnreadableError(DocsSearchError):
    """Raised when a cataloged document's source cannot be fetched."""

    def __init__(self, slug: tuple[str, ...], message: str) -> None:
        """Initialise error for the given slug.

        Args:
            slug: Slug of the document that could not be read.
            message: Human readable description of the failure.
        """
        super().__init__(message)
        self.slug = slug


class DocumentNotFoundError(DocumentUnreadableError):
    """Raised when no document exists at the requested slug."""
