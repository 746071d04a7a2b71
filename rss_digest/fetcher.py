from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

import httpx

from .aggregator import merge_feeds
from .exceptions import FeedFetchError, FeedParseError
from .models import Feed, FeedItem
from .parser import parse_feed

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; DailyNewsBot/1.0)"
DEFAULT_TIMEOUT_S = 10.0


async def fetch_feed_text(url: str, client: httpx.AsyncClient) -> str:
    """
    GET a feed URL and return its body.

    Raises FeedFetchError on network errors and non-2xx responses.
    """
    try:
        response = await client.get(
            url,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e

    if not response.is_success:
        raise FeedFetchError(f"Failed to fetch feed: {url} (HTTP {response.status_code})")
    return response.text


async def fetch_feed(url: str, client: httpx.AsyncClient) -> Optional[Feed]:
    """Fetch and parse one feed. Failures are logged and reported as None."""
    try:
        text = await fetch_feed_text(url, client)
        feed = parse_feed(text, url=url)
    except (FeedFetchError, FeedParseError) as e:
        logger.warning("Skipping feed %s: %s", url, e)
        return None

    logger.debug("Parsed %d items from %s", len(feed.items), url)
    return feed


async def fetch_feeds(
    urls: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> List[Feed]:
    """
    Fetch every URL concurrently and return the feeds that succeeded, in URL order.

    Failures on individual URLs are isolated and never abort the batch. A client
    is created (and closed) here unless the caller supplies one.
    """
    urls = list(urls)
    if not urls:
        return []

    if client is None:
        async with httpx.AsyncClient(timeout=timeout) as own_client:
            return await fetch_feeds(urls, own_client)

    results = await asyncio.gather(
        *(fetch_feed(u, client) for u in urls), return_exceptions=True
    )
    feeds: List[Feed] = []
    for url, result in zip(urls, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("Skipping feed %s: unexpected %s: %s", url, type(result).__name__, result)
            continue
        if result is not None:
            feeds.append(result)
    logger.info("Fetched %d of %d feeds", len(feeds), len(urls))
    return feeds


async def fetch_many(
    urls: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
    *,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> List[FeedItem]:
    """Fetch multiple feeds and merge their items, newest first."""
    feeds = await fetch_feeds(urls, client, timeout=timeout)
    return merge_feeds(feeds)
