"""Sanitize rendered fragments and substitute them into HTML layouts.

This module also owns the Jinja environment used for the packaged templates
(index menu, index page markdown, RSS feed) and the default layouts.

Layouts are plain HTML files containing fixed placeholders such as
``__TITLE__`` and ``__BODY__``. Every substituted value passes through
:func:`sanitize` first; values that layouts place inside attributes have their
double quotes escaped as well.

Examples
--------
>>> apply_layout("<title>__TITLE__</title>", title="Docs & notes")
'<title>Docs &amp; notes</title>'
"""

from __future__ import annotations

import copy
from pathlib import Path

import nh3
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pygments.token import STANDARD_TYPES

from ._constants import (
    PLACEHOLDER_BODY,
    PLACEHOLDER_CSS,
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_HEADER,
    PLACEHOLDER_INDEX,
    PLACEHOLDER_TITLE,
    PLACEHOLDER_URL,
)
from .errors import DocumentReadError

ALLOWED_CLASSES: dict[str, set[str]] = {
    "a": {"anchor", "Link"},
    "nav": {"index-menu", "header-list"},
    "p": {"h1", "h2", "h3", "h4", "h5"},
    "span": {name for name in STANDARD_TYPES.values() if name},
}
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


def template_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment for the packaged (or given) templates."""
    directory = templates_dir or DEFAULT_TEMPLATES_DIR
    return Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def load_layout(path: Path | None, default_name: str) -> str:
    """Return the layout at ``path`` or the packaged ``layouts/<default_name>``.

    Raises
    ------
    DocumentReadError
        If ``path`` is given but cannot be read.
    """
    target = path or DEFAULT_TEMPLATES_DIR / "layouts" / default_name
    try:
        return target.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentReadError(target, f"cannot read layout: {exc}") from exc


def _allowed_tags() -> set[str]:
    return set(nh3.ALLOWED_TAGS) | {"details", "summary", "nav"}


def _allowed_attributes() -> dict[str, set[str]]:
    attributes = copy.deepcopy(nh3.ALLOWED_ATTRIBUTES)
    for tag in HEADING_TAGS:
        attributes.setdefault(tag, set()).add("id")
    attributes.setdefault("img", set()).update({"loading", "width", "height"})
    attributes.setdefault("details", set()).add("open")
    return attributes


_TAGS = _allowed_tags()
_ATTRIBUTES = _allowed_attributes()


def sanitize(html: str) -> str:
    """Return ``html`` stripped of everything outside the allow-list."""
    return nh3.clean(
        html,
        tags=_TAGS,
        attributes=_ATTRIBUTES,
        allowed_classes=ALLOWED_CLASSES,
        link_rel=None,
    )


def _attribute_value(text: str) -> str:
    return sanitize(text).replace('"', "&quot;")


def apply_layout(
    layout: str,
    *,
    title: str = "",
    description: str = "",
    url: str = "",
    css: str = "",
    index: str = "",
    header: str = "",
    body: str = "",
) -> str:
    """Substitute sanitized values for the layout placeholders.

    ``__TITLE__`` and ``__DESCRIPTION__`` are replaced everywhere; the URL,
    CSS, index, header, and body placeholders only at their first occurrence.
    """
    html = layout.replace(PLACEHOLDER_TITLE, _attribute_value(title))
    html = html.replace(PLACEHOLDER_DESCRIPTION, _attribute_value(description))
    html = html.replace(PLACEHOLDER_URL, _attribute_value(url), 1)
    html = html.replace(PLACEHOLDER_CSS, _attribute_value(css), 1)
    html = html.replace(PLACEHOLDER_INDEX, sanitize(index), 1)
    html = html.replace(PLACEHOLDER_HEADER, sanitize(header), 1)
    return html.replace(PLACEHOLDER_BODY, sanitize(body), 1)


__all__ = [
    "ALLOWED_CLASSES",
    "DEFAULT_TEMPLATES_DIR",
    "apply_layout",
    "load_layout",
    "sanitize",
    "template_environment",
]
