r"""Line-level helpers that read structure out of a markdown body.

This module derives the page title, heading anchors, and the in-page header
navigation from markdown text. Anchors are produced by :func:`create_hash`,
which the HTML renderer also uses for heading ids so navigation links and
rendered headings always agree.

Example
-------
>>> from mdsite.markdown_parser import create_hash, create_title
>>> create_title("# Getting started\nBody")
'Getting started'
>>> create_hash("What is it?")
'What_is_it_'
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

if typ.TYPE_CHECKING:
    from mdsite.generator.renderer import MarkdownRenderer

HASH_RESERVED_PATTERN = re.compile(r"""[\s?:&=%"'/@\\]""", re.ASCII)
HEADER_PATTERN = re.compile(r"^(#{2,5}) ")
CLOSING_SEQUENCE_PATTERN = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
FENCE_MARKER = "```"
TITLE_PREFIX = "# "


def create_hash(text: str) -> str:
    """Return the anchor id for ``text``.

    Reserved characters (whitespace, ``?:&=%"'/@`` and backslash) become ``_``
    first; only then is ``<`` rewritten to ``-_`` and ``>`` to ``_-``.
    """
    text = HASH_RESERVED_PATTERN.sub("_", text)
    text = text.replace("<", "-_")
    return text.replace(">", "_-")


def create_title(markdown_text: str) -> str:
    """Return the text of the leading ``# `` heading, or ``""`` when absent."""
    if not markdown_text.startswith(TITLE_PREFIX):
        return ""
    first_line, _, _ = markdown_text.partition("\n")
    return first_line[len(TITLE_PREFIX) :].rstrip("\r")


def header_level(line: str) -> int | None:
    """Return the level (2-5) of a header line, or ``None`` for other lines."""
    match = HEADER_PATTERN.match(line)
    if match is None:
        return None
    return len(match.group(1))


def iter_headers(markdown_text: str) -> typ.Iterator[tuple[int, str]]:
    """Yield ``(level, raw heading text)`` for level 2-5 headers.

    Lines starting with three backticks toggle a code-fence flag; headers
    inside a fence are skipped. An ATX closing run of ``#`` is dropped, as
    the renderer drops it from the heading.
    """
    in_fence = False
    for line in markdown_text.split("\n"):
        if line.startswith(FENCE_MARKER):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        level = header_level(line)
        if level is None:
            continue
        content = line[level + 1 :].strip()
        yield level, CLOSING_SEQUENCE_PATTERN.sub("", content).strip()


def create_header_list(markdown_text: str, renderer: MarkdownRenderer) -> str:
    """Render the in-page header navigation for ``markdown_text``.

    Parameters
    ----------
    markdown_text : str
        Markdown body of the page.
    renderer : MarkdownRenderer
        Renderer used to reduce inline markup to the same plain text that
        heading anchors are hashed from.

    Returns
    -------
    str
        ``<nav class="header-list">`` containing one ``<p class="hN">`` link
        per header.
    """
    entries: list[str] = []
    for level, content in iter_headers(markdown_text):
        text = renderer.inline_text(content)
        href = create_hash(text)
        entries.append(
            f'<p class="h{level}"><a href="#{escape(href)}">{escape(text)}</a></p>'
        )
    joined = "\n".join(entries)
    return f'<nav class="header-list">{joined}</nav>'


__all__ = [
    "create_hash",
    "create_header_list",
    "create_title",
    "header_level",
    "iter_headers",
]
