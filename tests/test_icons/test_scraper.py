"""Tests for icon discovery in root pages."""

from nbembed.icons import parse_icon_links, pick_best_icon
from nbembed.models import IconCandidate

ORIGIN = "https://example.org"


class TestParseIconLinks:
    """Tests for parse_icon_links."""

    def test_matches_icon_rel_tokens(self):
        """Test that any rel token containing "icon" qualifies."""
        html = """
        <head>
          <link rel="icon" href="/a.png">
          <link rel="shortcut icon" href="/b.ico">
          <link rel="apple-touch-icon" href="/c.png" sizes="180x180">
          <link rel="ICON" href="/d.png">
          <link rel="stylesheet" href="/style.css">
          <link rel="preload" href="/icon-font.woff2">
        </head>
        """

        hrefs = [c.href for c in parse_icon_links(html, ORIGIN)]

        assert hrefs == [
            "https://example.org/a.png",
            "https://example.org/b.ico",
            "https://example.org/c.png",
            "https://example.org/d.png",
        ]

    def test_unquoted_attributes(self):
        """Test that unquoted attribute values are read."""
        html = "<link rel=icon href=/favicon.png sizes=32x32>"

        candidates = parse_icon_links(html, ORIGIN)

        assert candidates == [IconCandidate(href="https://example.org/favicon.png", sizes="32x32")]

    def test_resolves_hrefs_against_origin(self):
        """Test relative, absolute and protocol-relative hrefs."""
        html = """
        <link rel="icon" href="static/rel.png">
        <link rel="icon" href="https://cdn.example.net/abs.png">
        <link rel="icon" href="//cdn.example.net/proto.png">
        """

        hrefs = [c.href for c in parse_icon_links(html, ORIGIN)]

        assert hrefs == [
            "https://example.org/static/rel.png",
            "https://cdn.example.net/abs.png",
            "https://cdn.example.net/proto.png",
        ]

    def test_skips_links_without_href(self):
        """Test that icon links without a usable href are ignored."""
        html = '<link rel="icon"><link rel="icon" href=""><link rel="icon" href="/ok.png">'

        candidates = parse_icon_links(html, ORIGIN)

        assert [c.href for c in candidates] == ["https://example.org/ok.png"]

    def test_malformed_markup_does_not_raise(self):
        """Test that broken markup is tolerated."""
        html = '<html><head><link rel="icon" href="/ok.png"<link rel=<<>>'

        candidates = parse_icon_links(html, ORIGIN)

        assert isinstance(candidates, list)

    def test_no_candidates(self):
        """Test a page without icons."""
        assert parse_icon_links("<html><body>Hello</body></html>", ORIGIN) == []


class TestPickBestIcon:
    """Tests for pick_best_icon."""

    def test_picks_largest(self):
        """Test that the largest declared size wins."""
        candidates = [
            IconCandidate(href="small", sizes="16x16"),
            IconCandidate(href="large", sizes="192x192"),
            IconCandidate(href="medium", sizes="32x32"),
        ]

        assert pick_best_icon(candidates) == "large"

    def test_undeclared_sizes_count_as_16(self):
        """Test that a declared 32px icon beats an undeclared one."""
        candidates = [
            IconCandidate(href="undeclared"),
            IconCandidate(href="declared", sizes="32x32"),
        ]

        assert pick_best_icon(candidates) == "declared"

    def test_ties_keep_first(self):
        """Test that the first of equally sized icons wins."""
        candidates = [
            IconCandidate(href="first"),
            IconCandidate(href="second", sizes="any"),
            IconCandidate(href="third", sizes="16x16"),
        ]

        assert pick_best_icon(candidates) == "first"

    def test_empty(self):
        """Test that no candidates yields None."""
        assert pick_best_icon([]) is None
