"""Render the RSS 2.0 feed of the most recently dated pages.

Only pages whose front matter carries a ``date`` are eligible. Dates use the
fixed ``YYYY-MM-DD HH:MM`` format, are read as UTC, and are presented in the
configured time zone. The twenty most recent pages are kept with a
:class:`~mdsite.sorted_collection.SortedLimitedCollection`.

Example
-------
>>> from pathlib import Path
>>> from mdsite.feed import FeedBuilder
>>> builder = FeedBuilder(  # doctest: +SKIP
...     time_zone="Asia/Tokyo",
...     output_dir=Path("public"),
...     base_url="https://example.com",
...     title="Example",
...     description="Example docs",
... )
>>> builder.build(pages)  # doctest: +SKIP
PosixPath('public/rss.xml')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
import zoneinfo
from pathlib import Path

from ._constants import (
    FEED_DATE_FORMAT,
    FEED_RFC1123_FORMAT,
    MAX_FEED_ITEMS,
    RSS_FILE_NAME,
)
from .errors import DocumentReadError, FormatError, TimeZoneError
from .layout import template_environment
from .sorted_collection import SortedLimitedCollection

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .generator.models import Page

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class FeedEntry:
    """A dated page and its parsed publication time (UTC)."""

    page: Page
    published: dt.datetime


def load_time_zone(name: str) -> zoneinfo.ZoneInfo:
    """Return the ``ZoneInfo`` for ``name`` or raise ``TimeZoneError``."""
    try:
        return zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown time zone '{name}'"
        raise TimeZoneError(msg) from exc


def parse_feed_date(value: str) -> dt.datetime:
    """Parse a front-matter date as a UTC timestamp."""
    try:
        parsed = dt.datetime.strptime(value, FEED_DATE_FORMAT)
    except ValueError as exc:
        msg = f"invalid date '{value}', expected YYYY-MM-DD HH:MM"
        raise FormatError(msg) from exc
    return parsed.replace(tzinfo=dt.UTC)


def format_rfc1123(value: dt.datetime, zone: dt.tzinfo) -> str:
    """Format ``value`` in ``zone`` as an RFC 1123 date."""
    return value.astimezone(zone).strftime(FEED_RFC1123_FORMAT)


def newer_first(a: FeedEntry, b: FeedEntry) -> bool:
    """Return True when ``a`` was published after ``b``."""
    return a.published > b.published


def select_recent(
    pages: cabc.Iterable[Page], limit: int = MAX_FEED_ITEMS
) -> list[FeedEntry]:
    """Return up to ``limit`` dated pages, most recent first.

    Raises
    ------
    FormatError
        If a page date does not match the feed date format.
    """
    entries = [
        FeedEntry(page=page, published=parse_feed_date(page.meta.date))
        for page in pages
        if page.meta.date
    ]
    recent: SortedLimitedCollection[FeedEntry] = SortedLimitedCollection(
        limit=limit, compare=newer_first
    )
    recent.push(*entries)
    return recent.items


class FeedBuilder:
    """Write ``rss.xml`` for the most recent dated pages."""

    def __init__(
        self,
        *,
        time_zone: str,
        output_dir: Path,
        base_url: str,
        title: str,
        description: str,
        clock: cabc.Callable[[], dt.datetime] | None = None,
    ) -> None:
        self.time_zone = time_zone
        self.output_dir = output_dir
        self.base_url = base_url
        self.title = title
        self.description = description
        self._clock = clock or (lambda: dt.datetime.now(dt.UTC))
        self.template = template_environment().get_template("rss.xml")

    def render(self, pages: cabc.Iterable[Page]) -> str:
        """Return the RSS document for ``pages``, stripped of outer whitespace."""
        zone = load_time_zone(self.time_zone)
        entries = select_recent(pages)
        build_date = format_rfc1123(self._clock(), zone)
        rss = self.template.render(
            title=self.title,
            description=self.description,
            base_url=self.base_url,
            feed_name=RSS_FILE_NAME,
            build_date=build_date,
            entries=[
                {
                    "title": entry.page.title,
                    "url": entry.page.url,
                    "pub_date": format_rfc1123(entry.published, zone),
                }
                for entry in entries
            ],
        )
        return rss.strip()

    def build(self, pages: cabc.Iterable[Page]) -> Path:
        """Render the feed and write it to ``<output_dir>/rss.xml``.

        Raises
        ------
        TimeZoneError
            If the configured time zone is unknown.
        FormatError
            If a page date is malformed.
        DocumentReadError
            If the feed cannot be written.
        """
        rss = self.render(pages)
        output_path = self.output_dir / RSS_FILE_NAME
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rss, encoding="utf-8")
        except OSError as exc:
            raise DocumentReadError(output_path, f"cannot write feed: {exc}") from exc
        logger.debug("wrote %s", output_path)
        return output_path


__all__ = [
    "FeedBuilder",
    "FeedEntry",
    "format_rfc1123",
    "load_time_zone",
    "newer_first",
    "parse_feed_date",
    "select_recent",
]
