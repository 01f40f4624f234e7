# ==============================================================================
# Tests for Aggregator - aggregator.py
# ==============================================================================
"""
Tests for summary statistics, rounding, and the daily, referrer and page
breakdowns.
"""

import pytest

from pulse.core.aggregator import Aggregator, referrer_host, round_ratio
from pulse.core.models import Event
from pulse.core.session_processor import SessionProcessor

# ==============================================================================
# Helpers
# ==============================================================================


def _events(*records: dict) -> list[Event]:
    return [Event.from_record(r) for r in records]


def _summarize(events: list[Event]):
    sessions = SessionProcessor().reconstruct(events)
    return Aggregator().summarize(events, sessions)


# ==============================================================================
# round_ratio helper
# ==============================================================================


class TestRoundRatio:
    """Tests for the round_ratio helper function."""

    def test_zero_denominator(self):
        assert round_ratio(5, 0) == 0.0

    def test_two_decimal_places(self):
        assert round_ratio(100, 3) == 33.33
        assert round_ratio(200, 3) == 66.67

    def test_half_rounds_up(self):
        assert round_ratio(1, 8) == 0.13  # 0.125
        assert round_ratio(5, 8) == 0.63  # 0.625

    def test_exact_values(self):
        assert round_ratio(3, 2) == 1.5
        assert round_ratio(100, 1) == 100.0


# ==============================================================================
# Summary
# ==============================================================================


class TestSummarize:
    """Tests for the summarize() method."""

    def test_empty(self):
        summary = _summarize([])
        assert summary.total_views == 0
        assert summary.total_sessions == 0
        assert summary.pages_per_session == 0
        assert summary.bounce_rate == 0

    def test_scenario_two_sessions_one_bounce(self):
        events = _events(
            {"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:05:00Z"},
            {"sessionId": "F1", "page": "/b", "timestamp": "2024-03-01T12:40:00Z"},
        )
        summary = _summarize(events)
        assert summary.total_views == 3
        assert summary.total_sessions == 2
        assert summary.pages_per_session == 1.0
        assert summary.bounce_rate == 50.0

    def test_scenario_two_single_event_fingerprints(self):
        events = _events(
            {"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F2", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
        )
        summary = _summarize(events)
        assert summary.total_sessions == 2
        assert summary.bounce_rate == 100.0

    def test_total_views_counts_every_event_kind(self):
        events = _events(
            {"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F1", "page": "/a", "type": "page_unload", "timestamp": "2024-03-01T12:01:00Z"},
            {"sessionId": "F1", "page": "/a", "type": "custom_event", "timestamp": "2024-03-01T12:02:00Z"},
            {"sessionId": "F9", "timestamp": "garbage"},
        )
        summary = _summarize(events)
        assert summary.total_views == 4
        assert summary.total_sessions == 2

    def test_pages_per_session_rounded(self):
        events = _events(
            {"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F1", "page": "/b", "timestamp": "2024-03-01T12:01:00Z"},
            {"sessionId": "F2", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F3", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
        )
        summary = _summarize(events)
        assert summary.pages_per_session == 1.33
        assert summary.bounce_rate == 66.67


# ==============================================================================
# Daily counts
# ==============================================================================


class TestDailyCounts:
    """Tests for the daily_counts() method."""

    def test_groups_by_utc_day_ascending(self):
        events = _events(
            {"timestamp": "2024-03-02T08:00:00Z"},
            {"timestamp": "2024-03-01T23:59:59Z"},
            {"timestamp": "2024-03-02T01:00:00Z"},
        )
        counts = Aggregator().daily_counts(events)
        assert [(c.day, c.count) for c in counts] == [("2024-03-01", 1), ("2024-03-02", 2)]

    def test_offsets_converted_to_utc(self):
        """23:30 at UTC-05:00 is the next UTC day."""
        events = _events({"timestamp": "2024-03-01T23:30:00-05:00"})
        counts = Aggregator().daily_counts(events)
        assert counts[0].day == "2024-03-02"

    def test_malformed_timestamps_counted_last_as_unknown(self):
        events = _events(
            {"timestamp": "nope"},
            {"timestamp": "2024-03-01T00:00:00Z"},
            {},
        )
        counts = Aggregator().daily_counts(events)
        assert [(c.day, c.count) for c in counts] == [("2024-03-01", 1), ("unknown", 2)]

    def test_empty(self):
        assert Aggregator().daily_counts([]) == []


# ==============================================================================
# Referrers
# ==============================================================================


class TestReferrers:
    """Tests for referrer hostname extraction and ranking."""

    @pytest.mark.parametrize(
        "referrer,expected",
        [
            ("", "Direct"),
            ("https://www.google.com/search?q=x", "www.google.com"),
            ("http://News.Example.org:8080/a", "news.example.org"),
            ("not a url", "Direct"),
            ("http://[::1", "Direct"),
        ],
    )
    def test_referrer_host(self, referrer, expected):
        assert referrer_host(referrer) == expected

    def test_sorted_by_count_descending(self):
        events = _events(
            {"referrer": "https://a.com/1"},
            {"referrer": "https://b.com/1"},
            {"referrer": "https://b.com/2"},
            {"referrer": ""},
        )
        counts = Aggregator().referrer_counts(events)
        assert [(c.ref, c.count) for c in counts] == [("b.com", 2), ("a.com", 1), ("Direct", 1)]

    def test_ties_keep_first_seen_order(self):
        events = _events(
            {"referrer": "https://z.com"},
            {"referrer": ""},
            {"referrer": "https://m.com"},
        )
        counts = Aggregator().referrer_counts(events)
        assert [c.ref for c in counts] == ["z.com", "Direct", "m.com"]

    def test_truncated_to_top_n(self):
        events = _events(*({"referrer": f"https://site{i}.com"} for i in range(15)))
        assert len(Aggregator().referrer_counts(events)) == 10
        assert len(Aggregator(top_referrers=3).referrer_counts(events)) == 3


# ==============================================================================
# Page funnel
# ==============================================================================


class TestPageCounts:
    """Tests for entry, exit and visited page rankings."""

    def test_entry_exit_and_all_pages(self):
        events = _events(
            {"sessionId": "F1", "page": "/home", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F1", "page": "/pricing", "timestamp": "2024-03-01T12:01:00Z"},
            {"sessionId": "F2", "page": "/home", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F3", "page": "/blog", "timestamp": "2024-03-01T12:00:00Z"},
            {"sessionId": "F3", "page": "/home", "timestamp": "2024-03-01T12:02:00Z"},
        )
        sessions = SessionProcessor().reconstruct(events)
        pages = Aggregator().page_counts(sessions)

        assert [(p.page, p.count) for p in pages["entry"]] == [("/home", 2), ("/blog", 1)]
        assert [(p.page, p.count) for p in pages["exit"]] == [("/home", 2), ("/pricing", 1)]
        assert [(p.page, p.count) for p in pages["all"]] == [
            ("/home", 3),
            ("/pricing", 1),
            ("/blog", 1),
        ]

    def test_breakdowns_bundle(self):
        events = _events({"sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"})
        sessions = SessionProcessor().reconstruct(events)
        breakdowns = Aggregator().breakdowns(events, sessions)
        assert breakdowns.daily_counts[0].day == "2024-03-01"
        assert breakdowns.top_referrers[0].ref == "Direct"
        assert breakdowns.top_entry_pages[0].page == "/a"

    def test_negative_limit_raises(self):
        with pytest.raises(ValueError):
            Aggregator(top_pages=-1)
