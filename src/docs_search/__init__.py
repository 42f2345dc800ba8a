"""In-memory search over the documentation site's MDX pages."""
