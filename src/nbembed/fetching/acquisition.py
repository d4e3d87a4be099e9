"""Resolve notebook links to documents via the cache or a download."""

import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

import httpx

from nbembed import NotebookFetchError, NotebookParseError
from nbembed.cache import NotebookCache
from nbembed.models import NotebookDocument
from nbembed.parsing.notebook import NotebookParser

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0

DOWNLOAD_SCHEMES = ("http", "https")

# Web UI hosts whose /blob/ paths have a raw-content equivalent
RAW_CONTENT_HOSTS = {
    "github.com": "raw.githubusercontent.com",
    "www.github.com": "raw.githubusercontent.com",
}


def to_raw_url(url: str) -> str:
    """Rewrite a hosting web UI link to its raw-content form.

    https://github.com/org/repo/blob/main/nb.ipynb becomes
    https://raw.githubusercontent.com/org/repo/main/nb.ipynb. Links that are
    already raw, come from other hosts or have no "blob" segment are
    returned unchanged.

    Args:
        url: Notebook link

    Returns:
        str: Link to the notebook's raw bytes
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    raw_host = RAW_CONTENT_HOSTS.get((parts.hostname or "").lower())
    if raw_host is None:
        return url

    segments = parts.path.split("/")
    if "blob" not in segments:
        return url

    segments.remove("blob")
    return urlunsplit((parts.scheme, raw_host, "/".join(segments), parts.query, parts.fragment))


class NotebookFetcher:
    """Acquisition pipeline for a single notebook link.

    The cache is always consulted first. On a miss the notebook is
    downloaded (when allowed), parsed and written through to the cache.
    Every failure is logged and reported as None.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: NotebookCache,
        allow_remote_fetch: bool = True,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        parser: Optional[NotebookParser] = None,
    ):
        """Initialize the fetcher.

        Args:
            client: HTTP client used for downloads
            cache: Cache consulted before and written after downloads
            allow_remote_fetch: Download notebooks missing from the cache
            timeout: Download timeout in seconds
            parser: Parser for downloaded notebooks
        """
        self.client = client
        self.cache = cache
        self.allow_remote_fetch = allow_remote_fetch
        self.timeout = timeout
        self.parser = parser or NotebookParser()

    async def resolve(self, url: str) -> Optional[NotebookDocument]:
        """Resolve a notebook link to a document.

        Args:
            url: Notebook link as it appears in the page

        Returns:
            Optional[NotebookDocument]: The notebook, or None if it is neither
            cached nor downloadable
        """
        document = await self.cache.get(url)
        if document is not None:
            return document

        if not self.allow_remote_fetch:
            logger.debug("Notebook %s is not cached and downloads are disabled", url)
            return None

        try:
            document = await self.download(url)
        except NotebookFetchError as e:
            logger.warning("%s", e)
            return None

        await self.cache.put(url, document)
        return document

    async def download(self, url: str) -> NotebookDocument:
        """Download and parse a notebook.

        Args:
            url: Notebook link; hosting web UI links are rewritten first

        Returns:
            NotebookDocument: Parsed notebook

        Raises:
            NotebookFetchError: On network errors, bad status or bad content
        """
        raw_url = to_raw_url(url)
        try:
            scheme = urlsplit(raw_url).scheme
        except ValueError:
            scheme = ""
        if scheme not in DOWNLOAD_SCHEMES:
            raise NotebookFetchError(f"Cannot download notebook from {raw_url}: not an http(s) link")

        try:
            response = await self.client.get(
                raw_url, timeout=self.timeout, follow_redirects=True
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NotebookFetchError(
                f"Timed out downloading notebook from {raw_url} after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise NotebookFetchError(
                f"Failed to download notebook from {raw_url}: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise NotebookFetchError(f"Error downloading notebook from {raw_url}: {e}") from e

        try:
            return self.parser.parse(response.content, source=raw_url)
        except NotebookParseError as e:
            raise NotebookFetchError(f"Downloaded notebook is unreadable: {e}") from e
