"""Unit tests for document discovery."""

from __future__ import annotations

import typing as typ

import pytest

from mdsite.discovery import discover_documents
from mdsite.errors import DocumentReadError, FileNameError

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_discover_documents_is_recursive_and_sorted(source_dir: Path) -> None:
    """Documents are found in subdirectories and returned sorted."""
    for relative in ("z.md", "a/b.md", "a/notes.txt", "m.md"):
        path = source_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x", encoding="utf-8")
    (source_dir / "dir.md").mkdir()
    found = discover_documents(source_dir)
    assert found == [source_dir / "a" / "b.md", source_dir / "m.md", source_dir / "z.md"]


def test_discover_documents_honours_suffix(source_dir: Path) -> None:
    """A custom suffix selects other files."""
    (source_dir / "page.markdown").write_text("x", encoding="utf-8")
    (source_dir / "page.md").write_text("x", encoding="utf-8")
    assert discover_documents(source_dir, ".markdown") == [
        source_dir / "page.markdown"
    ]


def test_whitespace_in_path_is_rejected(source_dir: Path) -> None:
    """Directories and file names containing whitespace are rejected."""
    path = source_dir / "my docs" / "page.md"
    path.parent.mkdir()
    path.write_text("x", encoding="utf-8")
    with pytest.raises(FileNameError, match="whitespace"):
        discover_documents(source_dir)


def test_missing_root_raises(tmp_path: Path) -> None:
    """A missing source directory is a read error."""
    with pytest.raises(DocumentReadError, match="does not exist"):
        discover_documents(tmp_path / "absent")
