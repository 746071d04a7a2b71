from __future__ import annotations

import calendar
import re
import time
from datetime import datetime, timezone
from typing import List, Optional, Union

from feedparser.datetimes import _parse_date

from .exceptions import FeedParseError
from .markup import clean_html, extract_tag
from .models import Feed, FeedItem

_CHANNEL_RE = re.compile(r"<channel(?:\s[^>]*)?>(.*?)</channel\s*>", re.I | re.S)
_ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item\s*>", re.I | re.S)

DEFAULT_FEED_TITLE = "Unknown Feed"
DEFAULT_ITEM_TITLE = "No Title"


def _now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def parse_pub_date(text: Optional[str]) -> Optional[datetime]:
    """
    Convert RSS date text (RFC 822 or ISO 8601) to a timezone-aware UTC datetime.
    Returns None when the text is empty or not a date feedparser recognizes.
    """
    if not text or not text.strip():
        return None
    parsed = _parse_date(text.strip())
    if isinstance(parsed, time.struct_time):
        try:
            return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    # feedparser rejects some ISO forms Python itself writes (fractional seconds)
    try:
        dt = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_item(fragment: str) -> FeedItem:
    """
    Build a FeedItem from the inner text of one <item> block.
    Missing fields fall back to defaults, so this never fails on a sparse item.
    """
    content = clean_html(extract_tag(fragment, "content:encoded") or "")
    return FeedItem(
        title=extract_tag(fragment, "title") or DEFAULT_ITEM_TITLE,
        link=extract_tag(fragment, "link") or "",
        description=clean_html(extract_tag(fragment, "description") or ""),
        pub_date=extract_tag(fragment, "pubDate") or _now_iso(),
        content=content or None,
        category=extract_tag(fragment, "category") or None,
    )


def parse_feed(document: Union[str, bytes], url: Optional[str] = None) -> Feed:
    """
    Parse an RSS 2.0 document into a Feed.

    A document without a <channel> element is treated as one big channel.
    Raises FeedParseError only when bytes input is not valid UTF-8.
    """
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FeedParseError(f"Feed is not valid UTF-8: {url or '<text>'}") from e

    channel_match = _CHANNEL_RE.search(document)
    channel = channel_match.group(1) if channel_match else document

    # Channel metadata sits before the first item; don't borrow an item's title.
    first_item = _ITEM_RE.search(channel)
    header = channel[: first_item.start()] if first_item else channel

    items: List[FeedItem] = [parse_item(m.group(1)) for m in _ITEM_RE.finditer(channel)]

    return Feed(
        title=extract_tag(header, "title") or DEFAULT_FEED_TITLE,
        description=extract_tag(header, "description") or "",
        link=extract_tag(header, "link") or "",
        items=tuple(items),
        url=url,
    )
