"""The ordered catalog of indexable documentation pages."""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from docs_search.errors import CatalogError
from docs_search.models import CatalogEntry


def catalog_from_records(records: Iterable[Mapping[str, Any]]) -> tuple[CatalogEntry, ...]:
    """Build a validated catalog from ``{href, title, slug}`` mappings.

    Args:
        records: Catalog records in reading order.

    Returns:
        Tuple of CatalogEntry instances in the same order.

    Raises:
        CatalogError: If a record is malformed or an href is repeated.
    """
    entries: list[CatalogEntry] = []
    seen: set[str] = set()

    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            msg = f"Catalog record {position} is not an object"
            raise CatalogError(msg)
        missing = {"href", "title", "slug"} - record.keys()
        if missing:
            msg = f"Catalog record {position} is missing {', '.join(sorted(missing))}"
            raise CatalogError(msg)

        slug = record["slug"]
        if isinstance(slug, str) or not isinstance(slug, Iterable):
            msg = f"Catalog record {position} slug must be a list of segments"
            raise CatalogError(msg)

        entry = CatalogEntry(href=record["href"], title=record["title"], slug=tuple(slug))
        if entry.href in seen:
            msg = f"Duplicate catalog href: {entry.href}"
            raise CatalogError(msg)
        seen.add(entry.href)
        entries.append(entry)

    return tuple(entries)


def load_catalog(path: Path) -> tuple[CatalogEntry, ...]:
    """Load the catalog from a JSON file holding an array of records.

    Args:
        path: Path to the catalog JSON file.

    Returns:
        Tuple of CatalogEntry instances in file order.

    Raises:
        CatalogError: If the file cannot be read or fails validation.
    """
    try:
        records = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        msg = f"Could not load catalog from {path}: {e}"
        raise CatalogError(msg) from e

    if not isinstance(records, list):
        msg = f"Catalog file {path} must contain a JSON array"
        raise CatalogError(msg)
    return catalog_from_records(records)


DEFAULT_CATALOG = catalog_from_records(
    [
        # Getting Started
        {"href": "/docs/installation", "title": "Installation", "slug": ["installation"]},
        {"href": "/docs/quick-start", "title": "Quick Start", "slug": ["quick-start"]},
        {"href": "/docs/configuration", "title": "Configuration", "slug": ["configuration"]},
        # API Reference
        {"href": "/docs/api/upload", "title": "Upload", "slug": ["api", "upload"]},
        {"href": "/docs/api/retrieve", "title": "Retrieve", "slug": ["api", "retrieve"]},
        {"href": "/docs/api/delete", "title": "Delete", "slug": ["api", "delete"]},
        {"href": "/docs/api/get-asset", "title": "Get Asset", "slug": ["api", "get-asset"]},
        # Advanced
        {"href": "/docs/advanced/gas-strategies", "title": "Gas Strategies", "slug": ["advanced", "gas-strategies"]},
        {
            "href": "/docs/advanced/encryption-policies",
            "title": "Encryption Policies",
            "slug": ["advanced", "encryption-policies"],
        },
        {"href": "/docs/advanced/error-handling", "title": "Error Handling", "slug": ["advanced", "error-handling"]},
        {
            "href": "/docs/advanced/wallet-integration",
            "title": "Wallet Integration",
            "slug": ["advanced", "wallet-integration"],
        },
        # Examples
        {"href": "/docs/examples/basic-upload", "title": "Basic Upload", "slug": ["examples", "basic-upload"]},
        {"href": "/docs/examples/with-encryption", "title": "With Encryption", "slug": ["examples", "with-encryption"]},
        {
            "href": "/docs/examples/wallet-integration",
            "title": "Wallet Integration",
            "slug": ["examples", "wallet-integration"],
        },
    ]
)
