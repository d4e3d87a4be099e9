"""Notebook parsing."""

from nbembed.parsing.notebook import NotebookParser

__all__ = ["NotebookParser"]
