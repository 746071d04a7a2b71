"""Tests for merging, recency filtering and selection."""

from datetime import timedelta

from rss_digest.aggregator import (
    filter_by_category,
    filter_recent_news,
    latest_news,
    merge_feeds,
    select_recent,
    sort_newest_first,
)
from rss_digest.models import Feed

from .conftest import NOW, make_item, rfc822


def _feed(*items):
    return Feed(title="f", description="", link="", items=tuple(items))


class TestMergeFeeds:
    def test_merges_all_items_newest_first(self):
        a = _feed(make_item("A1", hours=10), make_item("A2", hours=2))
        b = _feed(make_item("B1", hours=5), make_item("B2", hours=1), make_item("B3", hours=30))

        merged = merge_feeds([a, b])

        assert len(merged) == 5
        assert [it.title for it in merged] == ["B2", "A2", "B1", "A1", "B3"]
        dates = [it.published_at for it in merged]
        assert all(x >= y for x, y in zip(dates, dates[1:]))

    def test_unparsable_dates_sort_last_without_error(self):
        a = _feed(make_item("Bad", pub_date="yesterday-ish"), make_item("Good", hours=48))
        merged = merge_feeds([a, _feed(make_item("Fresh", hours=1))])
        assert [it.title for it in merged] == ["Fresh", "Good", "Bad"]

    def test_mixed_date_formats(self):
        iso = (NOW - timedelta(hours=3)).isoformat()
        items = sort_newest_first([make_item("Iso", pub_date=iso), make_item("Rfc", hours=2)])
        assert [it.title for it in items] == ["Rfc", "Iso"]

    def test_empty(self):
        assert merge_feeds([]) == []
        assert merge_feeds([_feed()]) == []


class TestFilterRecentNews:
    def test_item_published_now_is_included(self):
        item = make_item("Now", pub_date=rfc822(NOW))
        assert filter_recent_news([item], 24, now=NOW) == [item]

    def test_item_older_than_window_is_excluded(self):
        item = make_item("Stale", hours=25)
        assert filter_recent_news([item], 24, now=NOW) == []

    def test_window_bounds_are_inclusive(self):
        item = make_item("Edge", hours=24)
        assert filter_recent_news([item], 24, now=NOW) == [item]

    def test_future_dated_items_are_excluded(self):
        item = make_item("Future", pub_date=rfc822(NOW + timedelta(minutes=5)))
        assert filter_recent_news([item], 24, now=NOW) == []

    def test_unparsable_dates_are_excluded(self):
        item = make_item("Bad", pub_date="not a date")
        assert filter_recent_news([item], 24, now=NOW) == []

    def test_preserves_order(self, sample_items):
        assert filter_recent_news(sample_items, 24, now=NOW) == sample_items


class TestSelectRecent:
    def test_no_widening_when_enough_items(self):
        items = [make_item(f"S{i}", hours=i + 1) for i in range(5)] + [make_item("Old", hours=30)]
        selected = select_recent(items, now=NOW)
        assert [it.title for it in selected] == ["S0", "S1", "S2", "S3", "S4"]

    def test_widens_to_36_hours(self):
        items = [make_item("Recent", hours=2), make_item("Yesterday", hours=30), make_item("Ancient", hours=40)]
        selected = select_recent(items, now=NOW)
        assert [it.title for it in selected] == ["Recent", "Yesterday"]

    def test_custom_windows(self):
        items = [make_item("A", hours=2), make_item("B", hours=10)]
        assert select_recent(items, hours=1, fallback_hours=5, min_items=1, now=NOW) == [items[0]]


class TestSelection:
    def test_latest_news_caps_count(self):
        items = [make_item(f"S{i}", hours=i + 1) for i in range(12)]
        assert latest_news(items) == items[:10]
        assert latest_news(items, 3) == items[:3]
        assert latest_news(items[:2], 10) == items[:2]

    def test_filter_by_category(self, sample_items):
        assert [it.title for it in filter_by_category(sample_items, "ai")] == ["Newest Story"]
        assert [it.title for it in filter_by_category(sample_items, "middle")] == ["Middle Story"]
        assert [it.title for it in filter_by_category(sample_items, "about older")] == ["Older Story"]
        assert filter_by_category(sample_items, "crypto") == []
