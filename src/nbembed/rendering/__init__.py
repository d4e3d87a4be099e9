"""HTML rendering of notebooks and their cells."""

from nbembed.rendering.cells import CellRenderer, escape_html
from nbembed.rendering.markdown import MarkdownRenderer, create_markdown_parser
from nbembed.rendering.notebook import NotebookRenderer, notebook_filename

__all__ = [
    "CellRenderer",
    "MarkdownRenderer",
    "NotebookRenderer",
    "create_markdown_parser",
    "escape_html",
    "notebook_filename",
]
