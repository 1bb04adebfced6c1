"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc

from mdsite.meta import Meta


@dc.dataclass(frozen=True, slots=True)
class Page:
    """Metadata, title, and public URL of one source document.

    Attributes
    ----------
    meta : Meta
        Resolved front-matter metadata.
    title : str
        Text of the leading level-one heading.
    url : str
        Absolute URL of the rendered HTML page.
    """

    meta: Meta
    title: str
    url: str


@dc.dataclass(frozen=True, slots=True)
class IndexItemPage:
    """A link to one page inside an index category."""

    title: str
    url: str


@dc.dataclass(frozen=True, slots=True)
class IndexItem:
    """One category of the table of contents with its ordered pages."""

    name: str
    pages: tuple[IndexItemPage, ...]


__all__ = ["IndexItem", "IndexItemPage", "Page"]
