"""Unit tests for titles, anchors, and the in-page header navigation."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from mdsite.markdown_parser import (
    create_hash,
    create_header_list,
    create_title,
    iter_headers,
)

if typ.TYPE_CHECKING:
    from mdsite.generator import MarkdownRenderer


def test_create_hash_rewrites_reserved_before_angle_brackets() -> None:
    """Reserved characters are replaced before ``<`` and ``>`` are rewritten."""
    actual = create_hash(r"""<a>?:&foo=%"\'@><""")
    assert actual == "-_a_-___foo_______--_", f"unexpected hash {actual!r}"


def test_create_hash_replaces_whitespace() -> None:
    """Spaces, tabs, and newlines all become underscores."""
    assert create_hash("a b\tc\nd") == "a_b_c_d"


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("# Title\nBody", "Title"),
        ("# Title", "Title"),
        ("## Not a title\nBody", ""),
        ("Body first\n# Title", ""),
    ],
)
def test_create_title(markdown: str, expected: str) -> None:
    """The title is the text of a leading level-one heading."""
    assert create_title(markdown) == expected, (
        f"expected {expected!r} for {markdown!r}"
    )


def test_iter_headers_skips_fences_and_level_one() -> None:
    """Level-one headings and fenced lines never appear in the header list."""
    markdown = (
        "# Title\n"
        "## Two\n"
        "```python\n"
        "## inside fence\n"
        "```\n"
        "### Three\n"
        "###### Six\n"
        "##### Five\n"
    )
    assert list(iter_headers(markdown)) == [(2, "Two"), (3, "Three"), (5, "Five")]


def test_header_list_links_match_plain_text(renderer: MarkdownRenderer) -> None:
    """Each entry links to the hash of the header's plain text."""
    nav = create_header_list("## Getting *started*\n#### Use `cli`", renderer)
    soup = BeautifulSoup(nav, "html.parser")
    root = soup.select_one("nav.header-list")
    assert root is not None, "expected a header-list nav element"
    entries = [(p["class"], p.a["href"], p.a.get_text()) for p in root.find_all("p")]
    assert entries == [
        (["h2"], "#Getting_started", "Getting started"),
        (["h4"], "#Use_cli", "Use cli"),
    ], f"unexpected header list entries {entries!r}"


def test_header_list_escapes_text(renderer: MarkdownRenderer) -> None:
    """Header text is HTML-escaped inside the navigation."""
    nav = create_header_list("## a &amp; b", renderer)
    assert "a &amp; b" in nav, f"expected escaped ampersand in {nav!r}"


def test_header_list_is_empty_nav_without_headers(
    renderer: MarkdownRenderer,
) -> None:
    """Bodies without headers still produce the navigation wrapper."""
    assert create_header_list("# Title\ntext", renderer) == (
        '<nav class="header-list"></nav>'
    )


@pytest.mark.parametrize(
    ("markdown", "expected"),
    [
        ("## Foo ##", [(2, "Foo")]),
        ("### Bar #####   ", [(3, "Bar")]),
        ("## C#", [(2, "C#")]),
        ("## ##", [(2, "")]),
    ],
)
def test_iter_headers_drops_closing_sequence(
    markdown: str, expected: list[tuple[int, str]]
) -> None:
    """A closing run of ``#`` preceded by a space is not part of the text."""
    assert list(iter_headers(markdown)) == expected


def test_header_list_matches_ids_of_closed_headings(
    renderer: MarkdownRenderer,
) -> None:
    """Navigation hrefs equal the rendered ids for closed ATX headings."""
    markdown = "## Foo ##\n### Bar baz ###"
    ids = [
        f"#{heading['id']}"
        for heading in BeautifulSoup(
            renderer.markdown(markdown), "html.parser"
        ).find_all(["h2", "h3"])
    ]
    nav = BeautifulSoup(create_header_list(markdown, renderer), "html.parser")
    hrefs = [anchor["href"] for anchor in nav.find_all("a")]
    assert hrefs == ids == ["#Foo", "#Bar_baz"], (
        f"header list {hrefs!r} does not match heading ids {ids!r}"
    )
