"""Load the site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from mdsite._constants import DEFAULT_SUFFIX

from .models import IndexPageConfig, SiteConfig, SiteConfigError

DEFAULT_CONFIG_NAME = "mdsite.yaml"


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing one site build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``mdsite.yaml``). Relative paths inside the file resolve against its
        directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If ``source_dir`` or ``base_url`` is missing, or a field has the
        wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdsite.config import load_site_config
    >>> config = load_site_config(Path("mdsite.yaml"))  # doctest: +SKIP
    >>> config.categories  # doctest: +SKIP
    ('Intro', 'Guides')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    source_dir = raw.get("source_dir")
    if not source_dir:
        msg = "Configuration must define 'source_dir'."
        raise SiteConfigError(msg)
    base_url = raw.get("base_url")
    if not base_url:
        msg = "Configuration must define 'base_url'."
        raise SiteConfigError(msg)

    return SiteConfig(
        source_dir=_resolve(base_dir, source_dir),
        output_dir=_resolve(base_dir, raw.get("output_dir", "public")),
        base_url=normalize_base_url(str(base_url)),
        categories=parse_categories(raw.get("categories")),
        page_layout=_optional_path(base_dir, raw.get("page_layout")),
        index_page=_build_index_page_config(base_dir, raw.get("index_page")),
        rss=_optional_bool(raw.get("rss"), "rss"),
        time_zone=str(raw.get("time_zone", "UTC")),
        single_page=_optional_bool(raw.get("single_page"), "single_page"),
        suffix=str(raw.get("suffix", DEFAULT_SUFFIX)),
        clean=_optional_bool(raw.get("clean"), "clean"),
        max_workers=_optional_positive_int(raw.get("max_workers"), "max_workers"),
        pygments_style=str(raw.get("pygments_style", "default")),
        config_dir=base_dir,
    )


def normalize_base_url(value: str) -> str:
    """Trim whitespace and surrounding slashes from ``value``.

    >>> normalize_base_url(" https://example.com/docs/ ")
    'https://example.com/docs'
    """
    return value.strip().strip("/")


def parse_categories(value: object) -> tuple[str, ...]:
    """Return category names from a comma-separated string or a list.

    Names keep their configured order; surrounding whitespace is removed but
    empty entries are left for :class:`~mdsite.meta.CategoryIndex` to skip.

    >>> parse_categories("Intro, Guides")
    ('Intro', 'Guides')
    >>> parse_categories(["Intro", "Guides"])
    ('Intro', 'Guides')
    """
    match value:
        case None:
            return ()
        case str():
            return tuple(name.strip() for name in value.split(","))
        case list() | tuple():
            return tuple(str(name).strip() for name in value)
        case _:
            msg = "'categories' must be a comma-separated string or a list."
            raise SiteConfigError(msg)


def _resolve(base_dir: Path, value: object) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base_dir / path


def _optional_path(base_dir: Path, value: object) -> Path | None:
    return _resolve(base_dir, value) if value else None


def _optional_bool(value: object, field: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        msg = f"'{field}' must be true or false."
        raise SiteConfigError(msg)
    return value


def _optional_positive_int(value: object, field: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"'{field}' must be a positive integer."
        raise SiteConfigError(msg)
    return value


def _build_index_page_config(base_dir: Path, raw: object) -> IndexPageConfig:
    match raw:
        case None:
            return IndexPageConfig()
        case dict():
            defaults = IndexPageConfig()
            return IndexPageConfig(
                layout=_optional_path(base_dir, raw.get("layout")),
                header=str(raw.get("header", defaults.header)),
                title=str(raw.get("title", defaults.title)),
                description=str(raw.get("description", defaults.description)),
            )
        case _:
            msg = "'index_page' must be a mapping."
            raise SiteConfigError(msg)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "load_site_config",
    "normalize_base_url",
    "parse_categories",
]
