"""nbembed - Embed linked Jupyter notebooks into rendered HTML pages.

Finds .ipynb links, fetches (and caches) the notebooks they point to and
replaces each link with a styled, self-contained notebook preview.
"""

__version__ = "0.1.0"


class NbEmbedError(Exception):
    """Base exception for all nbembed errors."""

    pass


class NotebookParseError(NbEmbedError):
    """Raised when a notebook document cannot be parsed."""

    pass


class NotebookFetchError(NbEmbedError):
    """Raised when a notebook cannot be downloaded."""

    pass


class CacheError(NbEmbedError):
    """Raised when a cache entry cannot be read or written."""

    pass


class ConfigurationError(NbEmbedError):
    """Raised when configuration is invalid or missing."""

    pass
