"""Local notebook cache."""

from nbembed.cache.store import NotebookCache, cache_key

__all__ = ["NotebookCache", "cache_key"]
