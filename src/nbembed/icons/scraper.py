"""Icon discovery in a site's root page.

This is a heuristic, not a full reading of the HTML icon rules. A <link>
counts as an icon when any of its rel tokens contains "icon", compared
case-insensitively, so "icon", "shortcut icon", "apple-touch-icon" and
"mask-icon" all qualify. Known edge cases:

- unquoted attributes (rel=icon href=/f.png) are read normally;
- a <link> without href, or with an empty one, is skipped;
- malformed markup is recovered the way html.parser recovers it, so a tag
  broken beyond recovery is silently ignored;
- sizes="any" or other unparseable values count as 16px.
"""

from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from nbembed.models import IconCandidate


def _attr_text(value) -> str:
    # bs4 returns multi-valued attributes (rel, sometimes sizes) as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value or ""


def parse_icon_links(html: str, base_url: str) -> list[IconCandidate]:
    """Collect icon candidates declared by <link> elements.

    Args:
        html: Root page markup
        base_url: URL the page was fetched from; relative hrefs are resolved
            against it

    Returns:
        list[IconCandidate]: Candidates in document order
    """
    soup = BeautifulSoup(html, "html.parser")
    candidates: list[IconCandidate] = []

    for link in soup.find_all("link"):
        rel_tokens = _attr_text(link.get("rel")).lower().split()
        if not any("icon" in token for token in rel_tokens):
            continue

        href = _attr_text(link.get("href")).strip()
        if not href:
            continue

        try:
            absolute = urljoin(base_url, href)
        except ValueError:
            absolute = href

        sizes = _attr_text(link.get("sizes")).strip() or None
        candidates.append(IconCandidate(href=absolute, sizes=sizes))

    return candidates


def pick_best_icon(candidates: list[IconCandidate]) -> Optional[str]:
    """Pick the largest declared icon.

    Candidates without a usable size count as 16px; among equally sized
    candidates the first one wins.

    Args:
        candidates: Icons found on the page

    Returns:
        Optional[str]: Chosen icon URL, or None if there are no candidates
    """
    if not candidates:
        return None
    return max(candidates, key=lambda candidate: candidate.size_hint).href
