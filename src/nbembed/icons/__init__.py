"""Site icon resolution for notebook embeds."""

from nbembed.icons.letter import letter_icon
from nbembed.icons.resolver import IconResolver, fallback_icon_urls
from nbembed.icons.scraper import parse_icon_links, pick_best_icon

__all__ = [
    "IconResolver",
    "fallback_icon_urls",
    "letter_icon",
    "parse_icon_links",
    "pick_best_icon",
]
