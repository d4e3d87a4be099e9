"""Pipeline instance wiring configuration, cache, HTTP client and renderers."""

from typing import Optional

import httpx
from bs4 import BeautifulSoup

from nbembed.cache import NotebookCache
from nbembed.config import EmbedConfig
from nbembed.embedding import LinkProcessor, ProcessingReport
from nbembed.fetching import NotebookFetcher
from nbembed.icons import IconResolver
from nbembed.rendering import CellRenderer, NotebookRenderer
from nbembed.rendering.markdown import MarkdownConverter


class NotebookEmbedder:
    """One self-contained notebook embedding pipeline.

    Every component gets its settings from the config passed here, so
    several embedders with different cache directories can coexist.

    Usage:
        async with NotebookEmbedder(EmbedConfig(cache_dir="cache")) as embedder:
            html, report = await embedder.embed_html(page)
    """

    def __init__(
        self,
        config: Optional[EmbedConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        markdown: Optional[MarkdownConverter] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration (defaults from the environment)
            client: HTTP client to use; one is created (and closed) if omitted
            markdown: Markdown to HTML converter for markdown cells
        """
        self.config = config or EmbedConfig()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient()

        self.cache = NotebookCache(self.config.cache_dir)
        self.fetcher = NotebookFetcher(
            self.client,
            self.cache,
            allow_remote_fetch=self.config.allow_remote_fetch,
            timeout=self.config.fetch_timeout,
        )
        self.icon_resolver = IconResolver(
            self.client,
            user_agent=self.config.user_agent,
            page_timeout=self.config.icon_page_timeout,
            probe_timeout=self.config.icon_probe_timeout,
        )
        self.renderer = NotebookRenderer(CellRenderer(markdown), self.icon_resolver)
        self.links = LinkProcessor(self.fetcher, self.renderer, self.cache)

    async def process(self, soup: BeautifulSoup) -> ProcessingReport:
        """Embed every notebook link of a parsed document in place."""
        return await self.links.process(soup)

    async def embed_html(self, html: str) -> tuple[str, ProcessingReport]:
        """Embed every notebook link of an HTML string.

        Args:
            html: Page markup

        Returns:
            tuple[str, ProcessingReport]: Updated markup and the outcome per link
        """
        soup = BeautifulSoup(html, "html.parser")
        report = await self.process(soup)
        return str(soup), report

    async def render_url(self, url: str) -> Optional[str]:
        """Resolve a single notebook link and render it.

        Returns:
            Optional[str]: Embed fragment, or None if the notebook is unavailable
        """
        self.cache.ensure_dir()
        document = await self.fetcher.resolve(url)
        if document is None:
            return None
        return await self.renderer.render(document, url)

    async def aclose(self) -> None:
        """Close the HTTP client if this embedder created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "NotebookEmbedder":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
