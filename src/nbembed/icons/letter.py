"""Synthetic letter icons, the last resort when no site icon is found."""

import base64

LETTER_ICON_COLOR = "#6366f1"

LETTER_ICON_TEMPLATE = """<svg width="32" height="32" xmlns="http://www.w3.org/2000/svg">
  <rect width="100%" height="100%" fill="{color}" rx="4"/>
  <text x="50%" y="50%" font-size="18" font-family="system-ui,sans-serif" font-weight="600" text-anchor="middle" dominant-baseline="middle" fill="white">{letter}</text>
</svg>"""


def letter_icon(domain: str) -> str:
    """Build a square SVG icon showing the domain's first letter.

    Args:
        domain: Site host name, e.g. "github.com"

    Returns:
        str: data:image/svg+xml;base64 URI
    """
    letter = domain[:1].upper() or "?"
    if letter in "<>&\"'":
        letter = "?"

    svg = LETTER_ICON_TEMPLATE.format(color=LETTER_ICON_COLOR, letter=letter)
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
