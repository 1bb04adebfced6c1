"""Render one markdown document into a themed HTML page.

This module turns a source document into ``<output>/<relative dir>/<stem>.html``.
:class:`PageContentGenerator` reads the document, renders its markdown body
with :class:`~mdsite.generator.renderer.MarkdownRenderer`, builds the in-page
header navigation and the description, and substitutes everything into the
page layout alongside the shared index menu.

Example
-------
>>> from pathlib import Path
>>> from mdsite.generator import MarkdownRenderer, PageContentGenerator
>>> renderer = MarkdownRenderer(Path("docs"))  # doctest: +SKIP
>>> generator = PageContentGenerator(  # doctest: +SKIP
...     renderer,
...     layout="<body>__BODY__</body>",
...     source_dir=Path("docs"),
...     output_dir=Path("public"),
...     base_url="https://example.com",
...     css_path="https://example.com/app.css?v=1",
... )
>>> generator.run(Path("docs/intro.md"))  # doctest: +SKIP
PosixPath('public/intro.html')
"""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from mdsite._constants import DESCRIPTION_LIMIT
from mdsite.errors import DocumentReadError, FormatError
from mdsite.generator.page_builder import (
    create_url,
    read_document,
    relative_dir,
    split_path,
)
from mdsite.generator.renderer import MarkdownRenderer
from mdsite.layout import apply_layout
from mdsite.markdown_parser import create_header_list, create_title
from mdsite.meta import split_document

logger = logging.getLogger(__name__)


def create_description(html: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Return the first ``limit`` characters of the text content of ``html``.

    Newlines are removed and a single leading ``#`` is dropped.
    """
    text = BeautifulSoup(html, "html.parser").get_text()
    text = text.replace("\n", "").removeprefix("#")
    return text[:limit]


def html_output_path(path: Path, source_dir: Path, output_dir: Path) -> Path:
    """Return the HTML file written for the document at ``path``."""
    directory, stem = split_path(path)
    rel = relative_dir(directory, source_dir)
    target_dir = output_dir / rel if rel else output_dir
    return target_dir / f"{stem}.html"


class PageContentGenerator:
    """Render documents into HTML pages that share one layout and index menu."""

    def __init__(
        self,
        renderer: MarkdownRenderer,
        *,
        layout: str,
        source_dir: Path,
        output_dir: Path,
        base_url: str,
        css_path: str,
        index_menu: str = "",
    ) -> None:
        """Initialize the generator with the shared rendering context.

        Parameters
        ----------
        renderer : MarkdownRenderer
            Renderer used for page bodies and header text.
        layout : str
            Page layout containing the ``__*__`` placeholders.
        source_dir : Path
            Root of the markdown sources.
        output_dir : Path
            Root of the generated site.
        base_url : str
            Base URL without a trailing slash.
        css_path : str
            URL of the stylesheet, including its version query.
        index_menu : str, optional
            Pre-rendered index navigation; empty in single-page mode.
        """
        self.renderer = renderer
        self.layout = layout
        self.source_dir = source_dir
        self.output_dir = output_dir
        self.base_url = base_url
        self.css_path = css_path
        self.index_menu = index_menu

    def render(self, path: Path) -> str:
        """Return the complete HTML page for the document at ``path``."""
        content = read_document(path)
        try:
            _front_matter, body = split_document(content)
        except FormatError as exc:
            raise FormatError(str(exc), path=path) from exc
        directory, stem = split_path(path)
        body_html = self.renderer.markdown(body)
        return apply_layout(
            self.layout,
            title=create_title(body),
            description=create_description(body_html),
            url=create_url(directory, stem, self.source_dir, self.base_url),
            css=self.css_path,
            index=self.index_menu,
            header=create_header_list(body, self.renderer),
            body=body_html,
        )

    def run(self, path: Path) -> Path:
        """Render ``path`` and write the page, returning the written file.

        Raises
        ------
        DocumentReadError
            If the document cannot be read or the page cannot be written.
        FormatError
            If the document has no front-matter separator.
        """
        html = self.render(path)
        output_path = html_output_path(path, self.source_dir, self.output_dir)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise DocumentReadError(output_path, f"cannot write page: {exc}") from exc
        logger.debug("wrote %s", output_path)
        return output_path


__all__ = ["PageContentGenerator", "create_description", "html_output_path"]
