"""Aggregate pages into the table of contents and render the index page.

The table of contents groups pages by category. Pages are produced
concurrently, so their arrival order carries no meaning; :func:`aggregate`
sorts categories by their configured order and pages by their front-matter
order, which makes the result independent of build timing. Two pages may not
claim the same slot: a category order belongs to a single category name, and a
page order is unique within its category.

Typical usage:

>>> from mdsite.docs_index import aggregate, create_index_menu
>>> items = aggregate(pages)  # doctest: +SKIP
>>> menu = create_index_menu(items)  # doctest: +SKIP

:class:`IndexPageBuilder` renders the same items as markdown through the site
renderer and writes ``index.html`` using the index layout.
"""

from __future__ import annotations

import itertools
import logging
import typing as typ
from pathlib import Path

from ._constants import INDEX_FILE_NAME
from .errors import DocumentReadError, DuplicateCategoryError, DuplicatePageOrderError
from .generator.models import IndexItem, IndexItemPage
from .layout import apply_layout, template_environment

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .generator.models import Page
    from .generator.renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

IndexRow = tuple[int, str, int, str, str]


def aggregate(pages: cabc.Iterable[Page]) -> list[IndexItem]:
    """Fold pages into category-grouped, order-sorted index items.

    Parameters
    ----------
    pages : Iterable[Page]
        Pages of one build, in any order.

    Returns
    -------
    list[IndexItem]
        Items ascending by category order, each with pages ascending by page
        order.

    Raises
    ------
    DuplicateCategoryError
        If two different category names share one category order.
    DuplicatePageOrderError
        If two pages of one category share one page order.
    """
    category_owners: dict[int, Page] = {}
    slot_owners: dict[tuple[int, int], Page] = {}
    rows: list[IndexRow] = []
    for page in pages:
        category = page.meta.category
        owner = category_owners.setdefault(category.order, page)
        if owner.meta.category.name != category.name:
            raise DuplicateCategoryError(owner, page)
        slot = (category.order, page.meta.order)
        existing = slot_owners.setdefault(slot, page)
        if existing is not page:
            raise DuplicatePageOrderError(existing, page)
        rows.append(
            (category.order, category.name, page.meta.order, page.title, page.url)
        )

    rows.sort(key=lambda row: (row[0], row[2]))
    items: list[IndexItem] = []
    for (_order, name), group in itertools.groupby(rows, key=lambda row: row[:2]):
        items.append(
            IndexItem(
                name=name,
                pages=tuple(IndexItemPage(title=row[3], url=row[4]) for row in group),
            )
        )
    return items


def create_index_menu(items: cabc.Sequence[IndexItem]) -> str:
    """Render the collapsible index navigation shown beside every page."""
    template = template_environment().get_template("index_menu.html")
    return template.render(items=items).strip()


def create_index_markdown(header: str, items: cabc.Sequence[IndexItem]) -> str:
    """Return the markdown source of the index page."""
    template = template_environment().get_template("index_page.md")
    return template.render(header=header, items=items)


class IndexPageBuilder:
    """Render ``index.html`` listing every category and its pages."""

    def __init__(
        self,
        renderer: MarkdownRenderer,
        *,
        layout: str,
        output_dir: Path,
        base_url: str,
        css_path: str,
        header: str,
        title: str,
        description: str,
    ) -> None:
        """Initialize the index page builder.

        Parameters
        ----------
        renderer : MarkdownRenderer
            Renderer applied to the generated index markdown.
        layout : str
            Index layout containing the ``__*__`` placeholders.
        output_dir : Path
            Root of the generated site.
        base_url : str
            Base URL of the site, substituted for ``__URL__``.
        css_path : str
            Versioned stylesheet URL.
        header : str
            Text of the level-one heading at the top of the index.
        title : str
            Page title.
        description : str
            Page description.
        """
        self.renderer = renderer
        self.layout = layout
        self.output_dir = output_dir
        self.base_url = base_url
        self.css_path = css_path
        self.header = header
        self.title = title
        self.description = description

    def render(self, items: cabc.Sequence[IndexItem]) -> str:
        """Return the complete index page HTML."""
        body = self.renderer.markdown(create_index_markdown(self.header, items))
        return apply_layout(
            self.layout,
            title=self.title,
            description=self.description,
            url=self.base_url,
            css=self.css_path,
            body=body,
        )

    def run(self, items: cabc.Sequence[IndexItem]) -> Path:
        """Render and write ``index.html``, returning its path."""
        output_path = self.output_dir / INDEX_FILE_NAME
        html = self.render(items)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise DocumentReadError(output_path, f"cannot write index: {exc}") from exc
        logger.debug("wrote %s", output_path)
        return output_path


__all__ = [
    "IndexPageBuilder",
    "aggregate",
    "create_index_markdown",
    "create_index_menu",
]
