"""Markdown to HTML conversion for markdown cells."""

from typing import Callable, Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.front_matter import front_matter_plugin

MarkdownConverter = Callable[[str], str]


def create_markdown_parser() -> MarkdownIt:
    """Build the parser used for notebook markdown.

    Raw HTML is passed through, single newlines become <br>, GFM tables and
    strikethrough are enabled, and $...$ / $$...$$ become math spans.
    """
    md = MarkdownIt(
        "commonmark",
        {"html": True, "breaks": True, "typographer": True},
    ).enable(["table", "strikethrough", "replacements", "smartquotes"])
    md.use(front_matter_plugin)
    md.use(dollarmath_plugin)
    return md


class MarkdownRenderer:
    """Default markdown converter; any callable taking text and returning HTML works."""

    def __init__(self, parser: Optional[MarkdownIt] = None):
        self.parser = parser or create_markdown_parser()

    def __call__(self, text: str) -> str:
        return self.parser.render(text)
