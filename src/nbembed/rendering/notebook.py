"""Assemble a full notebook into one embeddable HTML fragment."""

from urllib.parse import unquote, urlsplit

from nbembed.icons import IconResolver
from nbembed.models import NotebookDocument
from nbembed.rendering.cells import CellRenderer, escape_html
from nbembed.rendering.styles import NOTEBOOK_CSS

DEFAULT_FILENAME = "notebook.ipynb"
NOTEBOOK_TITLE = "Jupyter Notebook"


def notebook_filename(url: str) -> str:
    """Display name for a notebook link: its last path segment.

    Args:
        url: Notebook link

    Returns:
        str: e.g. "analysis.ipynb", or "notebook.ipynb" if the link has none
    """
    try:
        path = urlsplit(url).path
    except ValueError:
        return DEFAULT_FILENAME

    name = unquote(path.split("/")[-1])
    return name or DEFAULT_FILENAME


def site_name(url: str) -> str:
    """Host name shown as the icon's alt text."""
    try:
        return urlsplit(url).hostname or url
    except ValueError:
        return url


class NotebookRenderer:
    """Render a notebook as a styled, self-contained HTML fragment.

    Layout:
        div.jupyter-notebook-embedded
            div.notebook-header   title, link to the source, site icon
            div.notebook-cells    one container per cell, in notebook order
        style                     the embed stylesheet
    """

    def __init__(
        self,
        cell_renderer: CellRenderer,
        icon_resolver: IconResolver,
        include_styles: bool = True,
    ):
        """Initialize the renderer.

        Args:
            cell_renderer: Renderer for individual cells
            icon_resolver: Resolver for the source site's icon
            include_styles: Append the stylesheet to every fragment
        """
        self.cell_renderer = cell_renderer
        self.icon_resolver = icon_resolver
        self.include_styles = include_styles

    async def render(self, document: NotebookDocument, source_url: str) -> str:
        """Render a notebook.

        Args:
            document: Notebook to render
            source_url: Link the notebook was resolved from

        Returns:
            str: HTML fragment
        """
        cells = "\n".join(
            self.cell_renderer.render(cell, index)
            for index, cell in enumerate(document.cells)
        )
        icon = await self.icon_resolver.resolve(source_url)
        host = escape_html(site_name(source_url))

        header = (
            '<div class="notebook-header">'
            f'<span class="notebook-title">{NOTEBOOK_TITLE}</span>'
            '<div class="notebook-source">'
            f'<a href="{escape_html(source_url)}" target="_blank" '
            'rel="noopener noreferrer" class="notebook-link">'
            f"{escape_html(notebook_filename(source_url))}</a>"
            f'<img src="{escape_html(icon)}" alt="{host}" '
            f'class="notebook-favicon" title="Source: {host}">'
            "</div>"
            "</div>"
        )

        fragment = (
            '<div class="jupyter-notebook-embedded">'
            f"{header}"
            f'<div class="notebook-cells">\n{cells}\n</div>'
            "</div>"
        )

        if self.include_styles:
            fragment += f"<style>{NOTEBOOK_CSS}</style>"
        return fragment
