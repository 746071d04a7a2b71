"""Shared fixtures: RSS document builders and an httpx mock transport."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import httpx
import pytest

from rss_digest.models import FeedItem

NOW = datetime(2026, 10, 18, 8, 0, 0, tzinfo=timezone.utc)


def rfc822(dt: datetime) -> str:
    return format_datetime(dt, usegmt=True)


def hours_ago(hours: float) -> str:
    return rfc822(NOW - timedelta(hours=hours))


def make_item(title: str, *, hours: float = 1, **kwargs) -> FeedItem:
    fields = {
        "link": f"https://example.com/{title.lower().replace(' ', '-')}",
        "description": f"About {title}",
        "pub_date": hours_ago(hours),
    }
    fields.update(kwargs)
    return FeedItem(title=title, **fields)


def rss_item(title: str, pub_date: str, *, link: str = "", description: str = "") -> str:
    return (
        "<item>"
        f"<title>{title}</title>"
        f"<link>{link or 'https://example.com/' + title.lower().replace(' ', '-')}</link>"
        f"<description>{description or 'About ' + title}</description>"
        f"<pubDate>{pub_date}</pubDate>"
        "</item>"
    )


def rss_document(*items: str, title: str = "Example Feed") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title>"
        "<link>https://example.com</link>"
        "<description>Example channel</description>"
        + "".join(items)
        + "</channel></rss>"
    )


def mock_transport(routes: dict) -> httpx.MockTransport:
    """
    routes maps URL -> response body (str), HTTP status (int) or an exception
    instance to raise for that URL. Unknown URLs get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route, text="error")
        if route is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=route, headers={"Content-Type": "application/rss+xml"})

    return httpx.MockTransport(handler)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_items():
    """Three recent items, newest first."""
    return [
        make_item("Newest Story", hours=1, category="AI"),
        make_item("Middle Story", hours=5),
        make_item("Older Story", hours=20, category="Startups"),
    ]
