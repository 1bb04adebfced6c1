"""Typed dataclasses describing an mdsite build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from mdsite._constants import DEFAULT_SUFFIX


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class IndexPageConfig:
    """Presentation of the generated ``index.html``."""

    layout: Path | None = None
    header: str = "Index"
    title: str = ""
    description: str = ""


@dc.dataclass(slots=True)
class SiteConfig:
    """Everything a :class:`~mdsite.builder.SiteBuilder` needs for one build.

    Attributes
    ----------
    source_dir : Path
        Root of the markdown documents.
    output_dir : Path
        Root of the generated site.
    base_url : str
        Public URL of ``output_dir`` without surrounding slashes.
    categories : tuple[str, ...]
        Category names; a name's position is its category order.
    page_layout : Path | None
        Custom page layout; the packaged one is used when ``None``.
    index_page : IndexPageConfig
        Title, header, description, and layout of the index page.
    rss : bool
        Whether ``rss.xml`` is generated.
    time_zone : str
        IANA zone used for feed dates.
    single_page : bool
        Render pages without a metadata pass, index menu, or index page.
    suffix : str
        Document file suffix.
    clean : bool
        Remove ``output_dir`` before building.
    max_workers : int | None
        Thread pool size; the executor default when ``None``.
    pygments_style : str
        Pygments style used for code highlighting.
    config_dir : Path | None
        Directory of the configuration file, protected from clean-up.
    """

    source_dir: Path
    output_dir: Path
    base_url: str
    categories: tuple[str, ...] = ()
    page_layout: Path | None = None
    index_page: IndexPageConfig = dc.field(default_factory=IndexPageConfig)
    rss: bool = False
    time_zone: str = "UTC"
    single_page: bool = False
    suffix: str = DEFAULT_SUFFIX
    clean: bool = False
    max_workers: int | None = None
    pygments_style: str = "default"
    config_dir: Path | None = None


__all__ = ["IndexPageConfig", "SiteConfig", "SiteConfigError"]
