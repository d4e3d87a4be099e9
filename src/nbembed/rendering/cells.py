"""HTML rendering of individual notebook cells."""

import html
import logging
import re
from typing import Optional

from nbembed.models import (
    Cell,
    CodeCell,
    DisplayOutput,
    ErrorOutput,
    MarkdownCell,
    Output,
    StreamOutput,
)
from nbembed.rendering.markdown import MarkdownConverter, MarkdownRenderer

logger = logging.getLogger(__name__)

CODE_LANGUAGE = "python"

_CLASS_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' for insertion into HTML text or attributes."""
    return html.escape(text, quote=True)


def input_label(execution_count: Optional[int]) -> str:
    """Label for a code cell's input, e.g. "In [3]:" or "In [ ]:"."""
    return f"In [{' ' if execution_count is None else execution_count}]:"


def output_label(execution_count: Optional[int]) -> str:
    """Label for a code cell's outputs, e.g. "Out[3]:" or "Out[ ]:"."""
    return f"Out[{' ' if execution_count is None else execution_count}]:"


class CellRenderer:
    """Render notebook cells to HTML.

    Every cell is wrapped in <div id="notebook-cell-N"> carrying the
    notebook-cell and notebook-<type>-cell classes. Text taken from the
    notebook is escaped exactly once; text/html outputs are inserted as-is.
    """

    def __init__(self, markdown: Optional[MarkdownConverter] = None):
        """Initialize the renderer.

        Args:
            markdown: Markdown to HTML converter (markdown-it by default)
        """
        self.markdown = markdown or MarkdownRenderer()

    def render(self, cell: Cell, index: int) -> str:
        """Render one cell.

        Args:
            cell: Cell to render
            index: Position of the cell in the notebook

        Returns:
            str: Cell markup; an empty cell container if rendering failed
        """
        try:
            content = self._render_content(cell)
        except Exception as e:
            logger.warning("Failed to render notebook cell %d: %s", index, e)
            content = ""

        cell_type = _CLASS_UNSAFE.sub("-", cell.cell_type) or "unknown"
        return (
            f'<div id="notebook-cell-{index}" '
            f'class="notebook-cell notebook-{cell_type}-cell">{content}</div>'
        )

    def _render_content(self, cell: Cell) -> str:
        if isinstance(cell, MarkdownCell):
            return f'<div class="notebook-markdown-cell">{self.render_markdown(cell.source)}</div>'
        elif isinstance(cell, CodeCell):
            return self._render_code(cell)
        return ""

    def render_markdown(self, source: str) -> str:
        """Convert markdown, falling back to an escaped paragraph on failure."""
        try:
            return self.markdown(source)
        except Exception as e:
            logger.warning("Error converting markdown cell: %s", e)
            return f"<p>{escape_html(source)}</p>"

    def _render_code(self, cell: CodeCell) -> str:
        code_block = (
            '<div class="notebook-code-input">'
            f'<div class="notebook-execution-count">{input_label(cell.execution_count)}</div>'
            '<div class="notebook-code-content">'
            f'<pre><code class="language-{CODE_LANGUAGE}">{escape_html(cell.source)}</code></pre>'
            "</div>"
            "</div>"
        )

        if not cell.outputs:
            return code_block

        outputs = "".join(self.render_output(output) for output in cell.outputs)
        return (
            f"{code_block}"
            '<div class="notebook-outputs">'
            f'<div class="notebook-output-label">{output_label(cell.execution_count)}</div>'
            f'<div class="notebook-output-content">{outputs}</div>'
            "</div>"
        )

    def render_output(self, output: Output) -> str:
        """Render one output; unknown or broken outputs render as ""."""
        try:
            if isinstance(output, StreamOutput):
                return (
                    '<div class="notebook-stream-output">'
                    f"<pre>{escape_html(output.text)}</pre></div>"
                )
            elif isinstance(output, DisplayOutput):
                return self._render_display(output)
            elif isinstance(output, ErrorOutput):
                traceback = "\n".join(output.traceback)
                return (
                    '<div class="notebook-error-output">'
                    f"<pre>{escape_html(traceback)}</pre></div>"
                )
        except Exception as e:
            logger.warning("Failed to render %s output: %s", output.output_type, e)
            return ""

        logger.debug("Skipping unsupported output type %s", output.output_type)
        return ""

    def _render_display(self, output: DisplayOutput) -> str:
        # Fixed order: text, image, html
        parts = []

        text = output.text_for("text/plain")
        if text:
            parts.append(f'<div class="notebook-text-output"><pre>{escape_html(text)}</pre></div>')

        image = output.text_for("image/png")
        if image:
            data = "".join(image.split())
            parts.append(
                '<div class="notebook-image-output">'
                f'<img src="data:image/png;base64,{escape_html(data)}" alt="Plot output" />'
                "</div>"
            )

        markup = output.text_for("text/html")
        if markup:
            parts.append(f'<div class="notebook-html-output">{markup}</div>')

        return "".join(parts)
