"""Build static documentation sites from annotated markdown documents.

This package exposes the CLI entry points used by the ``mdsite`` console
script to render pages, the category index, the RSS feed, and the site
stylesheet.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
