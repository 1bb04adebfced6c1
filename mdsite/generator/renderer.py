"""Render markdown to HTML with anchored headings, classed links, and sized images.

Parsing is CommonMark plus the GFM-like extensions of ``markdown-it-py``. Only
three token kinds are rendered differently from the stock HTML renderer:

* headings carry an id derived from :func:`~mdsite.markdown_parser.create_hash`
  and wrap their content in a self link;
* explicit links carry ``class="Link"``; autolinks keep the stock anchor;
* images under the local image directory get ``loading="lazy"`` and their
  pixel dimensions, probed from the source tree.

Fenced code blocks are highlighted with Pygments.
"""

from __future__ import annotations

import logging
import re
import typing as typ
from pathlib import Path
from urllib.parse import unquote

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.renderer import RendererHTML
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from mdsite._constants import IMAGE_DIR
from mdsite.assets import probe_image_size
from mdsite.markdown_parser import create_hash

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown_it.token import Token
    from markdown_it.utils import EnvType, OptionsDict

logger = logging.getLogger(__name__)

PARENT_PATH_PATTERN = re.compile(r"^(\.\./)+")
HIGHLIGHT_SELECTOR = "pre code"
# Autolinks and bare URLs keep the stock anchor without the link class.
AUTOLINK_MARKUP = frozenset({"autolink", "linkify"})


def inline_plain_text(token: Token | None) -> str:
    """Return the plain text carried by an inline token and its children."""
    if token is None:
        return ""
    if not token.children:
        return token.content
    parts: list[str] = []
    for child in token.children:
        if child.type in {"text", "code_inline", "image"}:
            parts.append(child.content)
        elif child.type in {"softbreak", "hardbreak"}:
            parts.append("\n")
    return "".join(parts)


def strip_parent_segments(destination: str) -> str:
    """Remove a leading run of ``../`` segments from ``destination``."""
    return PARENT_PATH_PATTERN.sub("", destination)


def is_local_image(image_dir: str, destination: str) -> bool:
    """Return True when ``destination`` points inside the local image directory."""
    return strip_parent_segments(destination).startswith(f"{image_dir}/")


class SiteHtmlRenderer(RendererHTML):
    """HTML renderer overriding heading, link, and image output.

    ``MarkdownRenderer`` sets :attr:`source_dir`, :attr:`image_dir`, and
    :attr:`image_probe` after construction.
    """

    source_dir: Path = Path()
    image_dir: str = IMAGE_DIR
    image_probe: cabc.Callable[[Path], tuple[int, int]] = staticmethod(
        probe_image_size
    )

    def heading_open(
        self, tokens: cabc.Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        token = tokens[idx]
        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        heading_id = create_hash(inline_plain_text(inline))
        return f'<{token.tag} id="{heading_id}"><a href="#{heading_id}">'

    def heading_close(
        self, tokens: cabc.Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        return f"</a></{tokens[idx].tag}>\n"

    def link_open(
        self, tokens: cabc.Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        token = tokens[idx]
        if token.markup in AUTOLINK_MARKUP:
            return self.renderToken(tokens, idx, options, env)
        href = str(token.attrGet("href") or "")
        return f'<a href="{escapeHtml(href)}" class="Link">'

    def link_close(
        self, tokens: cabc.Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        return "</a>"

    def image(
        self, tokens: cabc.Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        src = str(tokens[idx].attrGet("src") or "")
        destination = escapeHtml(src)
        if is_local_image(self.image_dir, src):
            path = self.source_dir / unquote(strip_parent_segments(src))
            try:
                width, height = self.image_probe(path)
            except (OSError, ValueError) as exc:
                logger.warning("cannot read image size of %s: %s", path, exc)
            else:
                return (
                    f'<img loading="lazy" src="{destination}" alt="{destination}" '
                    f'width="{width}" height="{height}">'
                )
        return f'<img src="{destination}" alt="{destination}">'


class MarkdownRenderer:
    """Render markdown and expose the matching syntax-highlighting stylesheet."""

    def __init__(
        self,
        source_dir: Path,
        *,
        image_dir: str = IMAGE_DIR,
        pygments_style: str = "default",
        image_probe: cabc.Callable[[Path], tuple[int, int]] | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        source_dir : Path
            Root of the markdown sources; local images resolve against it.
        image_dir : str, optional
            Name of the image directory below ``source_dir``.
        pygments_style : str, optional
            Pygments style used for fenced code blocks.
        image_probe : callable, optional
            Returns ``(width, height)`` for an image path; defaults to
            :func:`mdsite.assets.probe_image_size`.
        """
        self.source_dir = source_dir
        self.image_dir = image_dir
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)
        self._md = MarkdownIt(
            "gfm-like",
            {"highlight": self._highlight},
            renderer_cls=SiteHtmlRenderer,
        )
        renderer = typ.cast("SiteHtmlRenderer", self._md.renderer)
        renderer.source_dir = source_dir
        renderer.image_dir = image_dir
        if image_probe is not None:
            renderer.image_probe = image_probe

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(HIGHLIGHT_SELECTOR)

    def markdown(self, text: str) -> str:
        """Render markdown into HTML."""
        return self._md.render(text)

    def inline_text(self, text: str) -> str:
        """Return the plain text of inline markdown, dropping all markup."""
        tokens = self._md.parseInline(text)
        return inline_plain_text(tokens[0] if tokens else None)

    def _highlight(self, code: str, language: str, _attrs: str) -> str:
        """Highlight a fenced block; an empty result lets markdown-it escape it."""
        if not language:
            return ""
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            return ""
        return highlight(code, lexer, self._formatter)


__all__ = [
    "MarkdownRenderer",
    "SiteHtmlRenderer",
    "inline_plain_text",
    "is_local_image",
    "strip_parent_segments",
]
