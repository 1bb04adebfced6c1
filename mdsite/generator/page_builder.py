"""Build the ``Page`` record of one source document.

``PageBuilder`` reads a document, splits its front matter from the markdown
body, takes the title from the leading heading, and derives the public URL of
the rendered page from the document's location below the source root.

Example
-------
>>> from pathlib import Path
>>> from mdsite.meta import CategoryIndex
>>> builder = PageBuilder(
...     Path("docs"), "https://example.com", CategoryIndex.from_string("Intro")
... )
>>> builder.page_url(Path("docs/guide/install.md"))
'https://example.com/guide/install.html'
"""

from __future__ import annotations

import logging
from pathlib import Path

from mdsite.errors import DocumentReadError, FormatError, UnknownCategoryError
from mdsite.generator.models import Page
from mdsite.markdown_parser import create_title
from mdsite.meta import CategoryIndex, extract_meta

logger = logging.getLogger(__name__)


def read_document(path: Path) -> str:
    """Return the UTF-8 text of ``path`` or raise ``DocumentReadError``."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, f"cannot read document: {exc}") from exc


def split_path(path: Path) -> tuple[Path, str]:
    """Return the directory and the file name without extension of ``path``."""
    return path.parent, path.stem


def relative_dir(directory: Path, source_dir: Path) -> str:
    """Return ``directory`` relative to ``source_dir`` as a slash-free POSIX path."""
    try:
        rel = directory.relative_to(source_dir).as_posix()
    except ValueError:
        rel = directory.as_posix().removeprefix(source_dir.as_posix())
    if rel == ".":
        return ""
    return rel.strip("/")


def create_url(directory: Path, stem: str, source_dir: Path, base_url: str) -> str:
    """Return ``base_url/<relative dir>/<stem>.html``.

    The directory segment is omitted for documents directly in ``source_dir``.
    """
    rel = relative_dir(directory, source_dir)
    if rel:
        return f"{base_url}/{rel}/{stem}.html"
    return f"{base_url}/{stem}.html"


class PageBuilder:
    """Turn document paths into immutable ``Page`` records."""

    def __init__(
        self, source_dir: Path, base_url: str, categories: CategoryIndex
    ) -> None:
        self.source_dir = source_dir
        self.base_url = base_url
        self.categories = categories

    def page_url(self, path: Path) -> str:
        """Return the public URL of the page rendered from ``path``."""
        directory, stem = split_path(path)
        return create_url(directory, stem, self.source_dir, self.base_url)

    def build(self, path: Path) -> Page:
        """Read ``path`` and return its ``Page``.

        Raises
        ------
        DocumentReadError
            If the file cannot be read.
        FormatError
            If the separator is missing or the front matter is malformed.
        UnknownCategoryError
            If the document names a category that is not configured.
        """
        content = read_document(path)
        try:
            meta, body = extract_meta(content, self.categories)
        except FormatError as exc:
            raise FormatError(str(exc), path=path) from exc
        except UnknownCategoryError as exc:
            raise UnknownCategoryError(exc.name, exc.known, path=path) from exc
        page = Page(meta=meta, title=create_title(body), url=self.page_url(path))
        logger.debug("built page %s -> %s", path, page.url)
        return page


__all__ = [
    "PageBuilder",
    "create_url",
    "read_document",
    "relative_dir",
    "split_path",
]
