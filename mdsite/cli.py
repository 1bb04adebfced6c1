"""Cyclopts CLI entrypoint for building an mdsite static site.

The ``mdsite`` console script defined here renders a directory of markdown
documents into HTML pages, an index page, an optional RSS feed, the site
stylesheet, and the copied image directory. Settings come from a YAML file
(``mdsite.yaml`` by default); command-line flags and ``MDSITE_*``
environment variables override individual fields.

Examples
--------
Build the site described by the default configuration:

>>> from mdsite.cli import main
>>> main()  # doctest: +SKIP

Build into a different directory without the feed:

>>> from mdsite.cli import app
>>> app(["build", "--output-dir", "dist", "--no-rss"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .builder import SiteBuilder
from .config import DEFAULT_CONFIG_NAME, SiteConfigError, load_site_config
from .config.loader import normalize_base_url
from .errors import BuildError

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_NAME)

app = App(name="mdsite", help="Build a static documentation site from markdown.")

logger = logging.getLogger("mdsite")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render markdown documents into a static HTML site.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="MDSITE_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="MDSITE_OUTPUT_DIR"),
    ] = None,
    base_url: typ.Annotated[
        str | None,
        Parameter(help="Override the site base URL", env_var="MDSITE_BASE_URL"),
    ] = None,
    single_page: typ.Annotated[
        bool | None,
        Parameter(
            help="Render pages without index menu or index page",
            env_var="MDSITE_SINGLE_PAGE",
        ),
    ] = None,
    rss: typ.Annotated[
        bool | None,
        Parameter(help="Generate rss.xml", env_var="MDSITE_RSS"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Enable debug logging", env_var="MDSITE_VERBOSE")
    ] = False,
) -> int:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``mdsite.yaml`` configuration file (overridable via
        ``MDSITE_CONFIG``).
    output_dir : Path or None, optional
        Override the configured output directory.
    base_url : str or None, optional
        Override the configured base URL.
    single_page : bool or None, optional
        Override single-page mode; ``None`` keeps the configured value.
    rss : bool or None, optional
        Override feed generation; ``None`` keeps the configured value.
    verbose : bool, optional
        Log at DEBUG level.

    Returns
    -------
    int
        ``0`` on success, ``1`` when the configuration is invalid or the
        build fails.
    """
    _configure_logging(verbose=verbose)
    try:
        site_config = load_site_config(config)
    except (OSError, TypeError, SiteConfigError) as exc:
        logger.error("invalid configuration: %s", exc)
        return 1

    overrides: dict[str, typ.Any] = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if base_url is not None:
        overrides["base_url"] = normalize_base_url(base_url)
    if single_page is not None:
        overrides["single_page"] = single_page
    if rss is not None:
        overrides["rss"] = rss
    site_config = dc.replace(site_config, **overrides)

    try:
        result = SiteBuilder(site_config).run()
    except (BuildError, OSError) as exc:
        logger.error("build failed: %s", exc)
        return 1
    for path in result.written:
        print(f"wrote {_format_path(path)}")
    return 0


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mdsite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    sys.exit(app())


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
