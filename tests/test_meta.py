"""Unit tests for front-matter extraction and category resolution."""

from __future__ import annotations

import pytest

from mdsite.errors import FormatError, UnknownCategoryError
from mdsite.meta import Category, CategoryIndex, Meta, extract_meta, split_document


@pytest.fixture
def categories() -> CategoryIndex:
    """Return the ``A,B`` category index used across these tests."""
    return CategoryIndex.from_string("A,B")


def test_extract_meta_recovers_fields_and_trimmed_body(
    categories: CategoryIndex,
) -> None:
    """Extraction returns the parsed metadata and the stripped body."""
    content = (
        '{"category": "B", "order": 3, "date": "2024-05-06 07:08"}\n'
        "--- anything after the dashes\n\n"
        "# Title\nBody text\n\n"
    )
    meta, body = extract_meta(content, categories)
    assert meta == Meta(
        category=Category(name="B", order=1), order=3, date="2024-05-06 07:08"
    ), f"unexpected meta {meta!r}"
    assert body == "# Title\nBody text", f"expected trimmed body, got {body!r}"


def test_extract_meta_defaults_missing_date(categories: CategoryIndex) -> None:
    """Documents without a date get an empty date string."""
    meta, _body = extract_meta('{"category": "A", "order": 0}\n---\nx', categories)
    assert meta.date == "", f"expected empty date, got {meta.date!r}"


def test_extract_meta_treats_null_date_as_undated(
    categories: CategoryIndex,
) -> None:
    """A ``null`` date is read the same as a missing one."""
    meta, _body = extract_meta(
        '{"category": "A", "order": 0, "date": null}\n---\n# T', categories
    )
    assert meta.date == "", f"expected empty date, got {meta.date!r}"


def test_split_document_uses_first_separator_only() -> None:
    """Later ``---`` lines stay part of the body."""
    _front, body = split_document('{"category": "A"}\n---\nfirst\n---\nsecond')
    assert body == "first\n---\nsecond", f"expected body to keep rule, got {body!r}"


def test_missing_separator_raises_format_error(categories: CategoryIndex) -> None:
    """A document without a separator line is rejected."""
    with pytest.raises(FormatError, match="separator"):
        extract_meta('{"category": "A", "order": 0}\n# Title', categories)


@pytest.mark.parametrize(
    "front_matter",
    [
        "not json",
        '{"category": "A"}',
        '{"category": "A", "order": "first"}',
        '{"order": 1}',
    ],
)
def test_malformed_front_matter_raises_format_error(
    categories: CategoryIndex, front_matter: str
) -> None:
    """Invalid JSON, wrong types, and missing fields are format errors."""
    with pytest.raises(FormatError, match="front matter"):
        extract_meta(f"{front_matter}\n---\nbody", categories)


def test_unknown_category_lists_known_names(categories: CategoryIndex) -> None:
    """Unknown category names raise with the configured names attached."""
    with pytest.raises(UnknownCategoryError) as excinfo:
        extract_meta('{"category": "C", "order": 0}\n---\nbody', categories)
    assert excinfo.value.name == "C", "expected the unknown name on the error"
    assert excinfo.value.known == ("A", "B"), (
        f"expected known names ('A', 'B'), got {excinfo.value.known!r}"
    )


def test_category_index_first_occurrence_wins() -> None:
    """Duplicates keep their first order and empty entries take no slot."""
    index = CategoryIndex.from_string(" A, ,B,A,")
    assert index.names == ("A", "B"), f"unexpected names {index.names!r}"
    assert index.resolve("B") == Category(name="B", order=1), (
        "expected B to take order 1"
    )
    assert len(index) == 2, "expected two categories"
    assert "A" in index, "expected membership test to find A"


def test_category_index_accepts_iterables() -> None:
    """Lists loaded from YAML produce the same index as strings."""
    assert CategoryIndex(["A", "B"]).names == CategoryIndex.from_string("A,B").names
