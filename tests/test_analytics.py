from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from newsplus.api.history.analytics import (
    NONE_YET,
    STREAK_CAP,
    aggregate_reading_stats,
    compute_streak,
    parse_timestamp,
    reading_by_day,
    top_key,
    top_sources,
)
from newsplus.api.history.schemas import ReadEvent

UTC = timezone.utc
NOW = datetime(2024, 5, 10, 12, 0, tzinfo=UTC)


def event(n, read_at, category=None, source="BBC", published_at=None):
    return ReadEvent(
        title=f"t{n}",
        url=f"https://example.com/{n}",
        category=category,
        source={"id": None, "name": source} if source else None,
        read_at=read_at,
        published_at=published_at,
    )


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2024-05-10T08:00:00.000Z") == datetime(2024, 5, 10, 8, tzinfo=UTC)

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-05-10T08:00:00").tzinfo == UTC

    def test_garbage(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None


class TestStreak:
    def test_three_days_then_gap(self):
        dates = {date(2024, 5, 10), date(2024, 5, 9), date(2024, 5, 8), date(2024, 5, 6)}
        assert compute_streak(dates, date(2024, 5, 10)) == 3

    def test_zero_without_today(self):
        dates = {date(2024, 5, 9), date(2024, 5, 8)}
        assert compute_streak(dates, date(2024, 5, 10)) == 0

    def test_capped(self):
        today = date(2024, 5, 10)
        dates = {today - timedelta(days=i) for i in range(45)}
        assert compute_streak(dates, today) == STREAK_CAP == 30

    def test_single_day(self):
        assert compute_streak({date(2024, 5, 10)}, date(2024, 5, 10)) == 1


class TestAggregate:
    def test_empty(self):
        stats = aggregate_reading_stats([], NOW, UTC)
        assert stats.total_read == 0
        assert stats.categories == {}
        assert stats.sources == {}
        assert stats.streak == 0
        assert top_key(stats.categories) == NONE_YET

    def test_counts_and_top(self):
        events = [
            event(1, "2024-05-10T08:00:00Z", category="tech"),
            event(2, "2024-05-10T07:00:00Z", category="tech", source="Reuters"),
            event(3, "2024-05-09T07:00:00Z", category="science"),
        ]
        stats = aggregate_reading_stats(events, NOW, UTC)
        assert stats.total_read == 3
        assert stats.categories == {"tech": 2, "science": 1}
        assert stats.sources == {"BBC": 2, "Reuters": 1}
        assert stats.streak == 2
        assert top_key(stats.categories) == "tech"

    def test_defaults_for_missing_category_and_source(self):
        stats = aggregate_reading_stats([event(1, "2024-05-10T08:00:00Z", source=None)], NOW, UTC)
        assert stats.categories == {"general": 1}
        assert stats.sources == {"Unknown": 1}

    def test_unparseable_read_at_still_counted(self):
        stats = aggregate_reading_stats([event(1, "not a date", category="sports")], NOW, UTC)
        assert stats.total_read == 1
        assert stats.categories == {"sports": 1}
        assert stats.streak == 0

    def test_streak_uses_viewer_time_zone(self):
        # 01:00 UTC 는 뉴욕 기준 전날 21:00
        events = [event(1, "2024-05-10T01:00:00Z")]
        assert aggregate_reading_stats(events, NOW, UTC).streak == 1
        assert aggregate_reading_stats(events, NOW, ZoneInfo("America/New_York")).streak == 0


class TestTopKey:
    def test_tie_goes_to_first_seen(self):
        assert top_key({"science": 2, "tech": 2}) == "science"
        assert top_key({"tech": 2, "science": 2}) == "tech"

    def test_none_yet(self):
        assert top_key({}) == NONE_YET

    def test_top_sources_keeps_order_on_ties(self):
        counts = {"A": 1, "B": 3, "C": 1, "D": 3}
        assert top_sources(counts, 3) == [("B", 3), ("D", 3), ("A", 1)]


def test_reading_by_day_falls_back_to_published_at():
    events = [
        event(1, "2024-05-10T08:00:00Z"),
        event(2, "2024-05-09T08:00:00Z"),
        event(3, None, published_at="2024-05-09T01:00:00Z"),
        event(4, "2024-05-10T09:00:00Z"),
    ]
    assert reading_by_day(events, UTC) == [("2024-05-09", 2), ("2024-05-10", 2)]
