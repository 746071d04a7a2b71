from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .models import Feed, FeedItem

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_HOURS = 24
DEFAULT_FALLBACK_HOURS = 36
DEFAULT_MIN_ITEMS = 5
DEFAULT_MAX_ITEMS = 10


def _sort_key(item: FeedItem) -> float:
    dt = item.published_at
    # unparsable dates go after everything else
    return dt.timestamp() if dt else float("-inf")


def sort_newest_first(items: Iterable[FeedItem]) -> List[FeedItem]:
    return sorted(items, key=_sort_key, reverse=True)


def merge_feeds(feeds: Iterable[Feed]) -> List[FeedItem]:
    """Concatenate the items of every feed and sort them newest first."""
    merged: List[FeedItem] = []
    for feed in feeds:
        merged.extend(feed.items)
    return sort_newest_first(merged)


def filter_recent_news(
    items: Iterable[FeedItem],
    hours: float = DEFAULT_WINDOW_HOURS,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Keep items published within the last `hours`, preserving order.

    Future-dated items and items whose date cannot be parsed are dropped.
    """
    now = now or datetime.now(timezone.utc)
    window = timedelta(hours=hours)
    out: List[FeedItem] = []
    for it in items:
        published = it.published_at
        if published is None:
            logger.debug("Invalid date format for item: %s", it.title)
            continue
        age = now - published
        if timedelta(0) <= age <= window:
            out.append(it)
    return out


def select_recent(
    items: Iterable[FeedItem],
    hours: float = DEFAULT_WINDOW_HOURS,
    fallback_hours: float = DEFAULT_FALLBACK_HOURS,
    min_items: int = DEFAULT_MIN_ITEMS,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Filter to the last `hours`; if fewer than `min_items` survive, refilter the
    same candidates with the wider `fallback_hours` window.
    """
    candidates = list(items)
    now = now or datetime.now(timezone.utc)
    recent = filter_recent_news(candidates, hours, now=now)
    if len(recent) < min_items:
        logger.info(
            "Only %d items in the last %sh, widening to %sh",
            len(recent), hours, fallback_hours,
        )
        recent = filter_recent_news(candidates, fallback_hours, now=now)
    return recent


def latest_news(items: Iterable[FeedItem], count: int = DEFAULT_MAX_ITEMS) -> List[FeedItem]:
    return list(items)[: max(count, 0)]


def filter_by_category(items: Iterable[FeedItem], category: str) -> List[FeedItem]:
    """Case-insensitive match of `category` against an item's category, title or description."""
    needle = category.lower()
    return [
        it for it in items
        if needle in (it.category or "").lower()
        or needle in it.title.lower()
        or needle in it.description.lower()
    ]
