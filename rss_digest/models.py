from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class FeedItem:
    """
    One entry of an RSS feed.

    `pub_date` is kept exactly as the source wrote it. Use `published_at` for
    the parsed value, which is None when the text is not a recognizable date.
    """
    title: str
    link: str
    description: str
    pub_date: str
    content: Optional[str] = None
    category: Optional[str] = None

    @property
    def published_at(self) -> Optional[datetime]:
        from .parser import parse_pub_date  # local import to avoid circular

        return parse_pub_date(self.pub_date)


@dataclass(frozen=True)
class Feed:
    title: str
    description: str
    link: str
    items: Tuple[FeedItem, ...] = field(default_factory=tuple)
    url: Optional[str] = None
