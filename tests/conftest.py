"""Shared pytest fixtures for documentation search tests."""

from pathlib import Path

import pytest

from docs_search.catalog import catalog_from_records
from docs_search.models import CatalogEntry, IndexedItem, SearchIndex


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create a small documentation tree on disk.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to the docs directory.
    """
    root = tmp_path / "docs"
    (root / "api").mkdir(parents=True)
    (root / "examples").mkdir()

    (root / "index.mdx").write_text("# Documentation\n\nWelcome to the docs.\n")
    (root / "installation.mdx").write_text("# Installation\n\nInstall the package with **npm**.\n")
    (root / "api" / "upload.mdx").write_text(
        "# Upload\n\nUpload a file using the `upload` method.\n\n```ts\n// upload a file\nclient.upload(f)\n```\n"
    )
    (root / "examples" / "basic-upload.mdx").write_text("```ts\nconst x = await client.upload(file)\n```\n")
    return root


@pytest.fixture
def catalog() -> tuple[CatalogEntry, ...]:
    """Create a catalog matching the docs_dir fixture.

    Returns:
        Tuple of CatalogEntry instances.
    """
    return catalog_from_records(
        [
            {"href": "/docs/installation", "title": "Installation", "slug": ["installation"]},
            {"href": "/docs/api/upload", "title": "Upload", "slug": ["api", "upload"]},
            {"href": "/docs/examples/basic-upload", "title": "Basic Upload", "slug": ["examples", "basic-upload"]},
        ]
    )


@pytest.fixture
def sample_index() -> SearchIndex:
    """Create an in-memory index for query tests.

    Returns:
        SearchIndex with a handful of pages.
    """
    items = (
        IndexedItem(
            href="/docs/api/upload",
            title="Upload",
            slug=("api", "upload"),
            content="Upload a file using the upload method. See also retrieve.",
        ),
        IndexedItem(
            href="/docs/api/retrieve",
            title="Retrieve",
            slug=("api", "retrieve"),
            content="Retrieve a previously uploaded file by its content id.",
        ),
        IndexedItem(
            href="/docs/examples/basic-upload",
            title="Basic Upload",
            slug=("examples", "basic-upload"),
            content="Basic Upload",
        ),
        IndexedItem(
            href="/docs",
            title="Documentation",
            slug=(),
            content="Welcome to the documentation.",
        ),
    )
    return SearchIndex(items=items, built_at=0.0)
