"""Content-addressed storage for downloaded notebooks."""

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Optional

import nbformat

from nbembed import CacheError, NotebookParseError
from nbembed.models import NotebookDocument
from nbembed.parsing.notebook import NotebookParser

logger = logging.getLogger(__name__)

CACHE_SUFFIX = ".json"


def cache_key(url: str) -> str:
    """Derive the cache filename for a notebook link.

    The key is the SHA-256 digest of the link, so it is deterministic,
    safe as a filename and cannot be turned back into the link.

    Args:
        url: Notebook link exactly as it appears in the page

    Returns:
        str: Filename such as "3f2a...e1.json"
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest() + CACHE_SUFFIX


class NotebookCache:
    """Flat directory of cached notebooks, one file per link.

    Entries are written once after a successful download and never updated
    or evicted. Every failure degrades to "not cached" instead of raising:

    cache_dir/
        ├── <sha256(link)>.json
        └── ...
    """

    def __init__(self, cache_dir: Path | str, parser: Optional[NotebookParser] = None):
        """Initialize the cache.

        Args:
            cache_dir: Directory holding the cached notebooks
            parser: Parser used to read entries back
        """
        self.cache_dir = Path(cache_dir)
        self.parser = parser or NotebookParser()

    def ensure_dir(self) -> bool:
        """Create the cache directory if needed.

        Returns:
            bool: True if the directory exists afterwards
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.warning("Failed to create cache directory %s: %s", self.cache_dir, e)
            return False

    def path_for(self, url: str) -> Path:
        """Return the file a link is (or would be) cached in."""
        return self.cache_dir / cache_key(url)

    def contains(self, url: str) -> bool:
        """Check whether a link has a cache entry."""
        return self.path_for(url).is_file()

    async def get(self, url: str) -> Optional[NotebookDocument]:
        """Load a cached notebook.

        Args:
            url: Notebook link

        Returns:
            Optional[NotebookDocument]: Cached notebook, or None on a miss or
            an unreadable entry
        """
        try:
            return await asyncio.to_thread(self._read, url)
        except CacheError as e:
            logger.warning("Ignoring cache entry for %s: %s", url, e)
            return None

    async def put(self, url: str, document: NotebookDocument) -> bool:
        """Store a notebook for a link.

        Args:
            url: Notebook link
            document: Notebook to store

        Returns:
            bool: True if the entry was written
        """
        try:
            await asyncio.to_thread(self._write, url, document)
            return True
        except CacheError as e:
            logger.warning("Failed to cache notebook %s: %s", url, e)
            return False

    def _read(self, url: str) -> Optional[NotebookDocument]:
        path = self.path_for(url)
        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheError(f"Failed to read {path}: {e}") from e

        try:
            document = self.parser.parse(content, source=str(path))
        except NotebookParseError as e:
            raise CacheError(str(e)) from e

        logger.debug("Cache hit for %s (%s)", url, path.name)
        return document

    def _write(self, url: str, document: NotebookDocument) -> None:
        path = self.path_for(url)
        try:
            node = document.to_node()
            content = nbformat.writes(node)
        except Exception as e:
            raise CacheError(f"Failed to serialize notebook: {e}") from e

        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise CacheError(f"Failed to write {path}: {e}") from e

        logger.debug("Cached %s as %s", url, path.name)
