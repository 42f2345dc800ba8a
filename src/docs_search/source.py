"""Access to raw documentation sources on disk."""

from pathlib import Path
from typing import Protocol

from docs_search.errors import DocumentNotFoundError, DocumentUnreadableError


class DocumentSource(Protocol):
    """Anything that can return the raw text of a document by slug."""

    def read(self, slug: tuple[str, ...]) -> str:
        """Return the raw source of the document at ``slug``."""
        ...


class FileDocumentSource:
    """Reads MDX documents from a content directory.

    A slug such as ``("api", "upload")`` resolves to ``api/upload.mdx``; when
    that file is absent, ``api/upload/index.mdx`` is tried instead, so the
    empty slug resolves to the top-level ``index.mdx``.
    """

    INDEX_NAME = "index"

    def __init__(self, base_path: Path, extension: str = ".mdx") -> None:
        """Initialise source rooted at the given directory.

        Args:
            base_path: Directory holding the documentation sources.
            extension: File extension of documentation sources.
        """
        self.base_path = Path(base_path)
        self.extension = extension

    def read(self, slug: tuple[str, ...]) -> str:
        """Read the raw source of a document.

        Args:
            slug: Path segments identifying the document.

        Returns:
            Raw document text.

        Raises:
            DocumentNotFoundError: If no document exists at the slug.
            DocumentUnreadableError: If the file exists but cannot be read.
        """
        file_path = self.resolve(slug)
        if file_path is None:
            msg = f"No document found for slug {'/'.join(slug) or '<root>'}"
            raise DocumentNotFoundError(tuple(slug), msg)

        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Could not read {file_path}: {e}"
            raise DocumentUnreadableError(tuple(slug), msg) from e

    def resolve(self, slug: tuple[str, ...]) -> Path | None:
        """Find the file backing a slug.

        Args:
            slug: Path segments identifying the document.

        Returns:
            Path to the document file, or None if nothing matches.
        """
        if any(segment in ("", ".", "..") or "/" in segment or "\\" in segment for segment in slug):
            return None

        candidates = []
        if slug:
            candidates.append(self.base_path.joinpath(*slug[:-1], slug[-1] + self.extension))
        candidates.append(self.base_path.joinpath(*slug, self.INDEX_NAME + self.extension))

        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None
