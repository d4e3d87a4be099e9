"""Resolve the icon shown next to an embedded notebook's source link."""

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from nbembed.config import DEFAULT_USER_AGENT
from nbembed.icons.letter import letter_icon
from nbembed.icons.scraper import parse_icon_links, pick_best_icon

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TIMEOUT = 5.0
DEFAULT_PROBE_TIMEOUT = 3.0

GOOGLE_FAVICON_URL = "https://www.google.com/s2/favicons?domain={domain}&sz=32"
DUCKDUCKGO_ICON_URL = "https://icons.duckduckgo.com/ip3/{domain}.ico"

_NETWORK_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


def site_origin(scheme: str, host: str, port: Optional[int] = None) -> str:
    """Scheme, host and port of a site; credentials in the link are left out."""
    if ":" in host:
        host = f"[{host}]"
    return f"{scheme}://{host}" if port is None else f"{scheme}://{host}:{port}"


def fallback_icon_urls(origin: str, domain: str) -> list[str]:
    """Icon sources probed when the root page declares no usable icon.

    Args:
        origin: Scheme and host of the source site, e.g. "https://github.com"
        domain: Host name of the source site

    Returns:
        list[str]: Candidate URLs in the order they are tried
    """
    return [
        GOOGLE_FAVICON_URL.format(domain=domain),
        DUCKDUCKGO_ICON_URL.format(domain=domain),
        f"{origin}/favicon.ico",
    ]


class IconResolver:
    """Best-effort icon lookup for a notebook's source site.

    Strategies, first success wins:
        1. <link rel="...icon..."> elements on the site's root page
        2. favicon services and /favicon.ico, checked with HEAD requests
        3. a generated letter icon, which cannot fail
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        user_agent: str = DEFAULT_USER_AGENT,
        page_timeout: float = DEFAULT_PAGE_TIMEOUT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        """Initialize the resolver.

        Args:
            client: HTTP client used for page fetches and probes
            user_agent: User-Agent header for the root page request
            page_timeout: Root page timeout in seconds
            probe_timeout: Timeout for each fallback probe in seconds
        """
        self.client = client
        self.user_agent = user_agent
        self.page_timeout = page_timeout
        self.probe_timeout = probe_timeout

    async def resolve(self, source_url: str) -> str:
        """Resolve an icon for the site hosting a notebook.

        Args:
            source_url: Notebook link

        Returns:
            str: Icon URL or data URI; never raises
        """
        try:
            parts = urlsplit(source_url)
            domain = parts.hostname or ""
            port = parts.port
        except ValueError:
            return letter_icon("")

        if not domain or parts.scheme not in ("http", "https"):
            return letter_icon(domain)

        origin = site_origin(parts.scheme, domain, port)

        icon = await self.from_page(origin)
        if icon:
            logger.debug("Using icon %s declared by %s", icon, origin)
            return icon

        for candidate in fallback_icon_urls(origin, domain):
            if await self.exists(candidate):
                logger.debug("Using fallback icon %s for %s", candidate, domain)
                return candidate

        return letter_icon(domain)

    async def from_page(self, origin: str) -> Optional[str]:
        """Find the best icon declared on a site's root page.

        Args:
            origin: Scheme and host of the site

        Returns:
            Optional[str]: Absolute icon URL, or None if none was found
        """
        try:
            response = await self.client.get(
                origin,
                headers={"User-Agent": self.user_agent},
                timeout=self.page_timeout,
                follow_redirects=True,
            )
            if not response.is_success:
                logger.debug("Root page of %s returned HTTP %s", origin, response.status_code)
                return None
            return pick_best_icon(parse_icon_links(response.text, origin))
        except _NETWORK_ERRORS as e:
            logger.warning("Failed to fetch favicon from HTML for %s: %s", origin, e)
            return None

    async def exists(self, url: str) -> bool:
        """Check that an icon URL answers a HEAD request successfully."""
        try:
            response = await self.client.head(
                url, timeout=self.probe_timeout, follow_redirects=True
            )
        except _NETWORK_ERRORS:
            return False
        return response.is_success
