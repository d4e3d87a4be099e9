"""Replace notebook links in an HTML tree with embedded notebooks."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from nbembed.cache import NotebookCache
from nbembed.fetching import NotebookFetcher
from nbembed.rendering import NotebookRenderer

logger = logging.getLogger(__name__)

NOTEBOOK_SUFFIX = ".ipynb"
WRAPPER_CLASS = "notebook-wrapper-container"
UNAVAILABLE_CLASS = "notebook-link-unavailable"
SOURCE_ATTRIBUTE = "data-notebook-url"


def is_notebook_link(href: Any) -> bool:
    """Check whether a link target points at a notebook (case-sensitive)."""
    return isinstance(href, str) and href.endswith(NOTEBOOK_SUFFIX)


@dataclass
class ProcessingReport:
    """Outcome of one pass over an HTML tree.

    Attributes:
        embedded: Links replaced by an embedded notebook
        unavailable: Links that could not be resolved and were marked
    """

    embedded: list[str] = field(default_factory=list)
    unavailable: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.embedded) + len(self.unavailable)


class LinkProcessor:
    """Find notebook links in a tree and embed them concurrently.

    Each link gets its own task; all tasks are awaited together before
    process() returns. A failing link is marked unavailable and never
    affects the others.
    """

    def __init__(
        self,
        fetcher: NotebookFetcher,
        renderer: NotebookRenderer,
        cache: Optional[NotebookCache] = None,
    ):
        """Initialize the processor.

        Args:
            fetcher: Resolves links to notebooks
            renderer: Renders resolved notebooks
            cache: Cache whose directory is prepared before each pass
        """
        self.fetcher = fetcher
        self.renderer = renderer
        self.cache = cache

    def find_links(self, soup: BeautifulSoup) -> list[Tag]:
        """Return every <a> whose href ends in .ipynb.

        Links inside an already embedded notebook (its header link) are
        skipped so a page can be processed twice.
        """
        return [
            anchor
            for anchor in soup.find_all("a", href=True)
            if is_notebook_link(anchor["href"])
            and anchor.find_parent(class_=WRAPPER_CLASS) is None
        ]

    async def process(self, soup: BeautifulSoup) -> ProcessingReport:
        """Embed every notebook link of a tree in place.

        Args:
            soup: Parsed HTML document, modified in place

        Returns:
            ProcessingReport: Which links were embedded or marked unavailable
        """
        report = ProcessingReport()
        links = self.find_links(soup)
        if not links:
            return report

        if self.cache is not None:
            self.cache.ensure_dir()

        tasks = [asyncio.create_task(self._process_link(anchor, report)) for anchor in links]
        await asyncio.gather(*tasks)

        logger.info(
            "Embedded %d notebook(s), %d unavailable",
            len(report.embedded),
            len(report.unavailable),
        )
        return report

    async def _process_link(self, anchor: Tag, report: ProcessingReport) -> None:
        href = anchor["href"]
        markup = None

        try:
            document = await self.fetcher.resolve(href)
            if document is not None:
                markup = await self.renderer.render(document, href)
        except Exception as e:
            logger.warning("Error processing notebook link %s: %s", href, e)

        if markup is None:
            mark_unavailable(anchor)
            report.unavailable.append(href)
        else:
            embed_fragment(anchor, href, markup)
            report.embedded.append(href)


def embed_fragment(anchor: Tag, href: str, markup: str) -> None:
    """Turn an <a> into the wrapper div holding a rendered notebook."""
    fragment = BeautifulSoup(markup, "html.parser")

    anchor.name = "div"
    anchor.attrs = {"class": [WRAPPER_CLASS], SOURCE_ATTRIBUTE: href}
    anchor.clear()
    for child in list(fragment.contents):
        anchor.append(child.extract())


def mark_unavailable(anchor: Tag) -> None:
    """Flag a link as unavailable, keeping its text and other attributes."""
    classes = anchor.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if UNAVAILABLE_CLASS not in classes:
        classes = [*classes, UNAVAILABLE_CLASS]
    anchor["class"] = classes
