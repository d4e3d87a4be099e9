"""Data models for site icon discovery."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_ICON_SIZE = 16

_LEADING_NUMBER = re.compile(r"^(\d+)")


class IconCandidate(BaseModel):
    """An icon declared by a <link> element on a site's root page.

    Attributes:
        href: Absolute icon URL
        sizes: Raw sizes attribute (e.g. "32x32" or "16x16 32x32"), if any
    """

    href: str
    sizes: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def size_hint(self) -> int:
        """First declared dimension, or 16 when undeclared or unparseable."""
        if not self.sizes or not self.sizes.split():
            return DEFAULT_ICON_SIZE

        first = self.sizes.split()[0]
        match = _LEADING_NUMBER.match(first)
        if not match or int(match.group(1)) <= 0:
            return DEFAULT_ICON_SIZE
        return int(match.group(1))
