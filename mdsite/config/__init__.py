"""Load and validate the YAML configuration of an mdsite build.

The primary entry point is :func:`load_site_config`, which reads
``mdsite.yaml``, resolves relative paths against the file's directory,
applies defaults, and returns a :class:`SiteConfig` ready for
:class:`~mdsite.builder.SiteBuilder`.

Examples
--------
>>> from pathlib import Path
>>> from mdsite.config import load_site_config
>>> site = load_site_config(Path("mdsite.yaml"))  # doctest: +SKIP
>>> site.base_url  # doctest: +SKIP
'https://example.com/docs'
"""

from .loader import DEFAULT_CONFIG_NAME, load_site_config, parse_categories
from .models import IndexPageConfig, SiteConfig, SiteConfigError

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "IndexPageConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "parse_categories",
]
