"""
Digest rendering: turns a selected list of FeedItem into an email-ready HTML
document (inline styles only, no external resources) and a plain-text part.

Items are rendered in the order given; no sorting or filtering happens here.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional, Sequence

from jinja2 import Environment, PackageLoader, select_autoescape

from .models import FeedItem

DESCRIPTION_LIMIT = 200
ELLIPSIS = "..."
NO_SUMMARY = "(no summary)"

_env = Environment(
    loader=PackageLoader("rss_digest", "templates"),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _today(today: Optional[date]) -> date:
    return today or datetime.now(timezone.utc).date()


def format_heading_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def format_item_date(item: FeedItem) -> str:
    """YYYY-MM-DD for parsable dates, otherwise the source text unchanged."""
    published = item.published_at
    return published.strftime("%Y-%m-%d") if published else item.pub_date


def truncate_description(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if not text:
        return NO_SUMMARY
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def digest_subject(today: Optional[date] = None) -> str:
    return f"Your Daily Tech News - {format_heading_date(_today(today))}"


def render_digest_html(items: Sequence[FeedItem], today: Optional[date] = None) -> str:
    entries = [
        {
            "number": i,
            "title": it.title,
            "date": format_item_date(it),
            "category": it.category,
            "description": truncate_description(it.description),
            "link": it.link,
        }
        for i, it in enumerate(items, start=1)
    ]
    template = _env.get_template("digest.html.j2")
    return template.render(
        heading_date=format_heading_date(_today(today)),
        year=_today(today).year,
        count=len(entries),
        entries=entries,
    )


def render_digest_text(
    items: Sequence[FeedItem],
    limit: int = 5,
    today: Optional[date] = None,
) -> str:
    lines: List[str] = [f"Today's Tech News ({format_heading_date(_today(today))}):", ""]
    lines.extend(f"- {it.title}" for it in list(items)[:limit])
    return "\n".join(lines)
