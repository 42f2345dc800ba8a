"""Configuration for documentation search."""

import os

from dotenv import load_dotenv


class SearchConfig:
    """Configuration for the documentation search service.

    Defaults live on the class; ``from_env`` overrides them from the
    environment (and a ``.env`` file when present).
    """

    # Documentation sources
    DOCS_PATH: str = "content/docs"
    DOCUMENT_EXTENSION: str = ".mdx"
    CATALOG_PATH: str | None = None  # None uses the built-in catalog

    # Index cache
    CACHE_TTL_SECONDS: float = 5 * 60
    BUILD_WORKERS: int = 4

    # Query defaults
    DEFAULT_LIMIT: int = 10
    MAX_LIMIT: int = 50
    EXCERPT_LENGTH: int = 150

    @classmethod
    def from_env(cls, env_prefix: str = "DOCS_SEARCH_") -> "SearchConfig":
        """Create config from environment variables with optional prefix.

        Args:
            env_prefix: Prefix for environment variables.

        Returns:
            SearchConfig instance populated from environment.
        """
        load_dotenv()

        config = cls()

        def get_env(name: str, default: str) -> str:
            # Try with prefix first, then without
            prefixed = os.getenv(f"{env_prefix}{name}", None)
            if prefixed is not None:
                return prefixed
            return os.getenv(name, default)

        config.DOCS_PATH = get_env("DOCS_PATH", cls.DOCS_PATH) or cls.DOCS_PATH
        config.DOCUMENT_EXTENSION = get_env("DOCUMENT_EXTENSION", cls.DOCUMENT_EXTENSION) or cls.DOCUMENT_EXTENSION
        config.CATALOG_PATH = get_env("CATALOG_PATH", cls.CATALOG_PATH or "") or None
        config.CACHE_TTL_SECONDS = float(get_env("CACHE_TTL_SECONDS", str(cls.CACHE_TTL_SECONDS)))
        config.BUILD_WORKERS = int(get_env("BUILD_WORKERS", str(cls.BUILD_WORKERS)))
        config.DEFAULT_LIMIT = int(get_env("DEFAULT_LIMIT", str(cls.DEFAULT_LIMIT)))
        config.MAX_LIMIT = int(get_env("MAX_LIMIT", str(cls.MAX_LIMIT)))
        config.EXCERPT_LENGTH = int(get_env("EXCERPT_LENGTH", str(cls.EXCERPT_LENGTH)))

        return config
