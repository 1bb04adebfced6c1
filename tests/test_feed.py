"""Unit tests for the RSS feed builder."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest
from bs4 import BeautifulSoup

from mdsite.errors import FormatError, TimeZoneError
from mdsite.feed import FeedBuilder, parse_feed_date, select_recent
from mdsite.generator.models import Page
from mdsite.meta import Category, Meta

if typ.TYPE_CHECKING:
    from pathlib import Path

FIXED_NOW = dt.datetime(2024, 3, 1, 12, 0, tzinfo=dt.UTC)


def _page(title: str, date: str = "") -> Page:
    return Page(
        meta=Meta(category=Category(name="A", order=0), order=0, date=date),
        title=title,
        url=f"https://example.com/{title}.html",
    )


def _builder(tmp_path: Path, time_zone: str = "UTC") -> FeedBuilder:
    return FeedBuilder(
        time_zone=time_zone,
        output_dir=tmp_path,
        base_url="https://example.com",
        title="Example & Co",
        description="Recent pages",
        clock=lambda: FIXED_NOW,
    )


def test_parse_feed_date_is_utc() -> None:
    """Front-matter dates are read as UTC."""
    assert parse_feed_date("2024-01-02 03:04") == dt.datetime(
        2024, 1, 2, 3, 4, tzinfo=dt.UTC
    )


@pytest.mark.parametrize("value", ["2024/01/02 03:04", "2024-01-02", "yesterday"])
def test_parse_feed_date_rejects_other_formats(value: str) -> None:
    """Only ``YYYY-MM-DD HH:MM`` is accepted."""
    with pytest.raises(FormatError, match="invalid date"):
        parse_feed_date(value)


def test_select_recent_keeps_twenty_newest() -> None:
    """Undated pages are skipped and only the twenty newest remain."""
    pages = [_page(f"p{day:02d}", f"2024-01-{day:02d} 10:00") for day in range(1, 26)]
    pages.append(_page("undated"))
    recent = select_recent(pages)
    titles = [entry.page.title for entry in recent]
    assert titles == [f"p{day:02d}" for day in range(25, 5, -1)], (
        f"unexpected feed order {titles!r}"
    )


def test_build_writes_rss_document(tmp_path: Path) -> None:
    """The feed has channel metadata and one item per dated page."""
    path = _builder(tmp_path, "Asia/Tokyo").build(
        [_page("old", "2024-01-01 00:00"), _page("new", "2024-02-01 15:30")]
    )
    assert path == tmp_path / "rss.xml"
    text = path.read_text(encoding="utf-8")
    assert text == text.strip(), "expected the feed to be stripped"
    soup = BeautifulSoup(text, "html.parser")
    channel = soup.find("channel")
    assert channel is not None, f"expected a channel in {text!r}"
    assert channel.find("title").get_text() == "Example & Co"
    assert "Example &amp; Co" in text, "expected the title to be escaped"
    self_link = soup.find("atom:link")
    assert self_link is not None
    assert self_link["href"] == "https://example.com/rss.xml"
    assert channel.find("pubdate").get_text() == "Fri, 01 Mar 2024 21:00:00 JST"

    items = soup.find_all("item")
    assert [item.find("title").get_text() for item in items] == ["new", "old"]
    assert items[0].find("pubdate").get_text() == "Fri, 02 Feb 2024 00:30:00 JST"
    guid = items[0].find("guid")
    assert guid["ispermalink"] == "true"
    assert guid.get_text() == "https://example.com/new.html"


def test_unknown_time_zone_raises(tmp_path: Path) -> None:
    """Unknown zone names raise ``TimeZoneError``."""
    with pytest.raises(TimeZoneError, match="Nowhere/Special"):
        _builder(tmp_path, "Nowhere/Special").build([])
