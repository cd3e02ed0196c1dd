"""Link shortener backend: short codes, redirects and click counts."""

__version__ = "1.0"
