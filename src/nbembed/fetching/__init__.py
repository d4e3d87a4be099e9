"""Notebook acquisition: cache lookup, download and write-through."""

from nbembed.fetching.acquisition import NotebookFetcher, to_raw_url

__all__ = ["NotebookFetcher", "to_raw_url"]
