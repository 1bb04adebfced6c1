"""Shared fixtures for the mdsite test suite.

The fixtures build small markdown source trees in ``tmp_path`` and write real
PNG files with Pillow so image probing runs against genuine data.
"""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest
from PIL import Image

from mdsite.config import SiteConfig
from mdsite.generator import MarkdownRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def make_document(front_matter: dict[str, typ.Any], body: str) -> str:
    """Return document text with JSON front matter and a ``---`` separator."""
    return f"{msgspec_json.encode(front_matter).decode()}\n---\n{body}"


@pytest.fixture
def write_document(
    tmp_path: Path,
) -> cabc.Callable[..., Path]:
    """Return a helper that writes a document below ``tmp_path / 'docs'``."""

    def _write(
        relative: str,
        body: str,
        *,
        category: str = "A",
        order: int = 0,
        date: str | None = None,
    ) -> Path:
        front_matter: dict[str, typ.Any] = {"category": category, "order": order}
        if date is not None:
            front_matter["date"] = date
        path = tmp_path / "docs" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(make_document(front_matter, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return the (created) markdown source root."""
    path = tmp_path / "docs"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture
def sample_image(source_dir: Path) -> Path:
    """Write a 12x8 PNG to ``docs/images/sample.png``."""
    path = source_dir / "images" / "sample.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (12, 8), color="white").save(path)
    return path


@pytest.fixture
def renderer(source_dir: Path) -> MarkdownRenderer:
    """Return a renderer rooted at the temporary source tree."""
    return MarkdownRenderer(source_dir)


@pytest.fixture
def three_page_site(
    tmp_path: Path, write_document: cabc.Callable[..., Path]
) -> SiteConfig:
    """Return a config for three documents across categories ``A`` and ``B``."""
    write_document("intro.md", "# Intro\n\nWelcome.", category="A", order=0)
    write_document(
        "guide/setup.md",
        "# Setup\n\n## Install\n\nRun it.",
        category="A",
        order=1,
        date="2024-01-02 03:04",
    )
    write_document(
        "guide/usage.md",
        "# Usage\n\nUse it.",
        category="B",
        order=0,
        date="2024-02-03 04:05",
    )
    return SiteConfig(
        source_dir=tmp_path / "docs",
        output_dir=tmp_path / "public",
        base_url="https://example.com",
        categories=("A", "B"),
        rss=True,
    )
