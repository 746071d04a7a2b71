from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .aggregator import (
    DEFAULT_FALLBACK_HOURS,
    DEFAULT_MAX_ITEMS,
    DEFAULT_MIN_ITEMS,
    DEFAULT_WINDOW_HOURS,
)
from .fetcher import DEFAULT_TIMEOUT_S

RSS_FEEDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "ai": (
        "https://news.ycombinator.com/rss",
        "https://techcrunch.com/feed/",
    ),
    "tech": (
        "https://www.theverge.com/rss/index.xml",
        "https://www.wired.com/feed/rss",
    ),
    "startups": (
        "https://news.ycombinator.com/rss",
        "https://techcrunch.com/category/startups/feed/",
    ),
})

DEFAULT_FROM = "Daily News <daily-news@resend.dev>"


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(v.strip() for v in value.split(",") if v.strip())


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class DigestConfig:
    topics: Sequence[str] = ("tech",)
    feeds: Mapping[str, Sequence[str]] = field(default_factory=lambda: RSS_FEEDS)
    window_hours: float = DEFAULT_WINDOW_HOURS
    fallback_window_hours: float = DEFAULT_FALLBACK_HOURS
    min_items: int = DEFAULT_MIN_ITEMS
    max_items: int = DEFAULT_MAX_ITEMS
    request_timeout: float = DEFAULT_TIMEOUT_S
    resend_api_key: Optional[str] = None
    from_address: str = DEFAULT_FROM
    audience_id: Optional[str] = None
    recipients: Sequence[str] = ()
    dry_run: bool = False

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "DigestConfig":
        """
        Build a config from environment variables (optionally loading `.env` first).

        RESEND_API_KEY, DIGEST_FROM_EMAIL, RESEND_AUDIENCE_ID,
        DIGEST_RECIPIENTS (comma separated), DIGEST_TOPICS (comma separated),
        DIGEST_DRY_RUN.
        """
        if dotenv:
            load_dotenv()
        return cls(
            topics=_split_csv(os.getenv("DIGEST_TOPICS")) or ("tech",),
            resend_api_key=os.getenv("RESEND_API_KEY") or None,
            from_address=os.getenv("DIGEST_FROM_EMAIL", DEFAULT_FROM),
            audience_id=os.getenv("RESEND_AUDIENCE_ID") or None,
            recipients=_split_csv(os.getenv("DIGEST_RECIPIENTS")),
            dry_run=_env_flag(os.getenv("DIGEST_DRY_RUN")),
        )

    def feed_urls(self) -> List[str]:
        """URLs of the configured topics in order, each URL listed once."""
        urls: List[str] = []
        for topic in self.topics:
            if topic not in self.feeds:
                known = ", ".join(sorted(self.feeds))
                raise ValueError(f"Unknown topic {topic!r} (known: {known})")
            for u in self.feeds[topic]:
                if u not in urls:
                    urls.append(u)
        return urls
