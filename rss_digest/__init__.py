"""
rss_digest

A small pipeline that turns a handful of RSS feeds into a daily email digest.

Core ideas:
- Input: topic names mapped to RSS 2.0 feed URLs
- Process: fetch (concurrently) → parse → merge → sort (newest first)
  → recency filter (24h, widened to 36h when fewer than 5 items) → top 10
- Output: an inline-styled HTML digest, delivered through Resend

Example
-------
import asyncio
from rss_digest import DigestConfig, DigestPipeline

config = DigestConfig(topics=["ai", "tech"], dry_run=True)
result = asyncio.run(DigestPipeline(config).run())

for item in result.items:
    print(item.pub_date, item.title)
"""
from .aggregator import filter_by_category, filter_recent_news, latest_news, merge_feeds, select_recent
from .config import RSS_FEEDS, DigestConfig
from .core import DigestPipeline, DigestResult
from .exceptions import DeliveryError, DigestError, FeedFetchError, FeedParseError, NoFeedsAvailableError
from .fetcher import fetch_feed, fetch_feeds, fetch_many
from .markup import clean_html, decode_entities, extract_tag
from .models import Feed, FeedItem
from .parser import parse_feed, parse_pub_date
from .renderer import render_digest_html, render_digest_text

__all__ = [
    "Feed",
    "FeedItem",
    "DigestConfig",
    "DigestPipeline",
    "DigestResult",
    "RSS_FEEDS",
    "DigestError",
    "FeedFetchError",
    "FeedParseError",
    "NoFeedsAvailableError",
    "DeliveryError",
    "extract_tag",
    "decode_entities",
    "clean_html",
    "parse_feed",
    "parse_pub_date",
    "fetch_feed",
    "fetch_feeds",
    "fetch_many",
    "merge_feeds",
    "filter_recent_news",
    "select_recent",
    "latest_news",
    "filter_by_category",
    "render_digest_html",
    "render_digest_text",
]
