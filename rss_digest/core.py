from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

import httpx

from .aggregator import latest_news, merge_feeds, select_recent
from .config import DigestConfig
from .exceptions import NoFeedsAvailableError
from .fetcher import fetch_feeds
from .mailer import DigestSender, build_sender
from .models import FeedItem
from .renderer import digest_subject, render_digest_html, render_digest_text

logger = logging.getLogger(__name__)


@dataclass
class DigestResult:
    items: List[FeedItem]
    subject: str
    html: str
    text: str
    message_id: str


class DigestPipeline:
    """
    High-level API: build and send one digest.

    Pipeline: fetch (concurrently) → parse → merge → sort (newest first)
    → recency filter (widened when too few) → select → render → send
    """

    def __init__(
        self,
        config: DigestConfig,
        *,
        sender: Optional[DigestSender] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._sender = sender
        self._client = client

    @property
    def sender(self) -> DigestSender:
        if self._sender is None:
            self._sender = build_sender(self.config)
        return self._sender

    async def collect(self, now: Optional[datetime] = None) -> List[FeedItem]:
        """Fetch the configured feeds and return the items that go into the digest."""
        urls = self.config.feed_urls()
        feeds = await fetch_feeds(urls, self._client, timeout=self.config.request_timeout)
        if urls and not feeds:
            raise NoFeedsAvailableError(f"All {len(urls)} feeds failed")

        items = merge_feeds(feeds)
        recent = select_recent(
            items,
            hours=self.config.window_hours,
            fallback_hours=self.config.fallback_window_hours,
            min_items=self.config.min_items,
            now=now or datetime.now(timezone.utc),
        )
        selected = latest_news(recent, self.config.max_items)
        logger.info(
            "Selected %d of %d recent items (%d fetched from %d feeds)",
            len(selected), len(recent), len(items), len(feeds),
        )
        return selected

    async def run(self, now: Optional[datetime] = None) -> DigestResult:
        """Collect, render and deliver. Delivery failures propagate as DeliveryError."""
        now = now or datetime.now(timezone.utc)
        items = await self.collect(now=now)

        today = now.date()
        subject = digest_subject(today)
        html = render_digest_html(items, today=today)
        text = render_digest_text(items, today=today)

        # the provider SDK does blocking HTTP
        message_id = await asyncio.to_thread(
            self.sender.send, subject=subject, html=html, text=text
        )
        return DigestResult(
            items=items,
            subject=subject,
            html=html,
            text=text,
            message_id=message_id,
        )
