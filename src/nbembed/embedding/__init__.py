"""Notebook link discovery and in-place embedding."""

from nbembed.embedding.links import LinkProcessor, ProcessingReport, is_notebook_link

__all__ = ["LinkProcessor", "ProcessingReport", "is_notebook_link"]
