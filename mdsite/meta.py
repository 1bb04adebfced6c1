r"""Split annotated documents into front-matter metadata and markdown.

A document is a JSON front-matter object, a separator line starting with
``---`` and a markdown body. The category named in the front matter is resolved
against an ordered category list supplied by the caller, which fixes the
display order of every category in the generated index.

Example
-------
>>> from mdsite.meta import CategoryIndex, extract_meta
>>> categories = CategoryIndex.from_string("Intro,Guides")
>>> meta, body = extract_meta(
...     '{"category": "Guides", "order": 2}\n---\n# Install\nSteps',
...     categories,
... )
>>> (meta.category.name, meta.category.order, meta.order)
('Guides', 1, 2)
>>> body
'# Install\nSteps'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .errors import FormatError, UnknownCategoryError

SEPARATOR_PATTERN = re.compile(r"^---.*$", re.MULTILINE)


@dc.dataclass(frozen=True, slots=True)
class Category:
    """A named page grouping and its position in the index."""

    name: str
    order: int


@dc.dataclass(frozen=True, slots=True)
class Meta:
    """Resolved per-document metadata.

    Attributes
    ----------
    category : Category
        Category with the order taken from the caller's category list.
    order : int
        Position of the page within its category.
    date : str
        Publication date in ``YYYY-MM-DD HH:MM`` form; empty when undated.
    """

    category: Category
    order: int
    date: str = ""


class FrontMatter(msgspec.Struct):
    """Raw front matter exactly as written in the document."""

    category: str
    order: int
    date: str | None = None


class CategoryIndex:
    """Map category names to their display order.

    The first occurrence of a name fixes its order; later duplicates and empty
    entries are ignored.
    """

    def __init__(self, names: typ.Iterable[str] = ()) -> None:
        self._orders: dict[str, int] = {}
        for raw in names:
            name = str(raw).strip()
            if not name or name in self._orders:
                continue
            self._orders[name] = len(self._orders)

    @classmethod
    def from_string(cls, value: str) -> CategoryIndex:
        """Build an index from a comma-separated list of category names."""
        return cls(value.split(","))

    @property
    def names(self) -> tuple[str, ...]:
        """Return the category names in display order."""
        return tuple(self._orders)

    def resolve(self, name: str) -> Category:
        """Return the ``Category`` for ``name`` or raise ``UnknownCategoryError``."""
        try:
            return Category(name=name, order=self._orders[name])
        except KeyError:
            raise UnknownCategoryError(name, self._orders) from None

    def __contains__(self, name: object) -> bool:
        return name in self._orders

    def __len__(self) -> int:
        return len(self._orders)


def split_document(content: str) -> tuple[str, str]:
    """Split ``content`` into raw front matter and the stripped markdown body.

    Raises
    ------
    FormatError
        If no separator line is present.
    """
    parts = SEPARATOR_PATTERN.split(content, maxsplit=1)
    if len(parts) != 2:
        msg = "invalid content format: missing '---' separator line"
        raise FormatError(msg)
    front_matter, body = parts
    return front_matter, body.strip()


def parse_front_matter(text: str) -> FrontMatter:
    """Decode the JSON front matter block into a ``FrontMatter`` record."""
    try:
        return msgspec_json.decode(text.strip(), type=FrontMatter)
    except msgspec.DecodeError as exc:
        msg = f"invalid front matter: {exc}"
        raise FormatError(msg) from exc


def extract_meta(content: str, categories: CategoryIndex) -> tuple[Meta, str]:
    """Return the resolved ``Meta`` and the markdown body of a document.

    Parameters
    ----------
    content : str
        Full document text.
    categories : CategoryIndex
        Ordered category list used to resolve the category order.

    Returns
    -------
    tuple[Meta, str]
        Metadata and body trimmed of surrounding whitespace.

    Raises
    ------
    FormatError
        If the separator is missing or the front matter is malformed.
    UnknownCategoryError
        If the category is not in ``categories``.
    """
    front_matter, body = split_document(content)
    raw = parse_front_matter(front_matter)
    category = categories.resolve(raw.category)
    return Meta(category=category, order=raw.order, date=raw.date or ""), body


__all__ = [
    "SEPARATOR_PATTERN",
    "Category",
    "CategoryIndex",
    "FrontMatter",
    "Meta",
    "extract_meta",
    "parse_front_matter",
    "split_document",
]
