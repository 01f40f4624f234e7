# ==============================================================================
# Aggregator - Pure Domain Logic
# ==============================================================================
"""
Site-wide statistics over reconstructed sessions and raw events.

Provides:
- Summary: total views, total sessions, pages per session, bounce rate
- Daily event counts (UTC calendar days)
- Top referrer hostnames
- Top entry, exit and visited pages across sessions

Ratios are rounded half-up to two decimal places. Rankings are sorted by
count descending; ties keep first-seen order.
"""

from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlparse

from pulse.core.models import (
    Breakdowns,
    DailyCount,
    Event,
    PageCount,
    ReferrerCount,
    Session,
    Summary,
)

DIRECT_REFERRER = "Direct"
UNKNOWN_DAY = "unknown"

DEFAULT_TOP_REFERRERS = 10
DEFAULT_TOP_PAGES = 5

_TWO_PLACES = Decimal("0.01")


def round_ratio(numerator: int | float, denominator: int) -> float:
    """
    Divide and round half-up to two decimal places.

    Args:
        numerator: Dividend
        denominator: Divisor; 0 yields 0

    Returns:
        Rounded quotient as a float
    """
    if denominator == 0:
        return 0.0
    quotient = Decimal(numerator) / Decimal(denominator)
    return float(quotient.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def referrer_host(referrer: str) -> str:
    """Hostname of a referrer URL, or "Direct" if empty or unparseable."""
    if not referrer:
        return DIRECT_REFERRER
    try:
        host = urlparse(referrer.strip()).hostname
    except ValueError:
        return DIRECT_REFERRER
    return host or DIRECT_REFERRER


def _top(counts: dict[str, int], limit: int) -> list[tuple[str, int]]:
    # sorted() is stable and dicts keep insertion order, so ties stay first-seen
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]


class Aggregator:
    """
    Computes summary statistics and breakdowns.

    Stateless: every call is a pure function of its arguments.
    """

    def __init__(
        self,
        top_referrers: int = DEFAULT_TOP_REFERRERS,
        top_pages: int = DEFAULT_TOP_PAGES,
    ):
        if top_referrers < 0 or top_pages < 0:
            raise ValueError("top-N limits must be non-negative")
        self.top_referrers = top_referrers
        self.top_pages = top_pages

    def summarize(
        self,
        events: list[Event],
        sessions: list[Session],
        total_views: int | None = None,
    ) -> Summary:
        """
        Compute the four headline statistics.

        Args:
            events: Every input event (all kinds count toward total views)
            sessions: Sessions reconstructed from those events
            total_views: Stored record count, when some records could not be
                loaded as events (default: len(events))

        Returns:
            Summary with totals, pages per session and bounce rate
        """
        total_sessions = len(sessions)
        page_total = sum(len(session.pages) for session in sessions)
        bounces = sum(1 for session in sessions if session.is_bounce)

        return Summary(
            total_views=len(events) if total_views is None else total_views,
            total_sessions=total_sessions,
            pages_per_session=round_ratio(page_total, total_sessions),
            bounce_rate=round_ratio(100 * bounces, total_sessions),
        )

    def daily_counts(self, events: list[Event]) -> list[DailyCount]:
        """Count events per UTC day, ascending, with "unknown" last."""
        by_day: dict[str, int] = {}
        for event in events:
            event_time = event.event_time
            day = event_time.date().isoformat() if event_time else UNKNOWN_DAY
            by_day[day] = by_day.get(day, 0) + 1

        days = sorted(day for day in by_day if day != UNKNOWN_DAY)
        if UNKNOWN_DAY in by_day:
            days.append(UNKNOWN_DAY)
        return [DailyCount(day=day, count=by_day[day]) for day in days]

    def referrer_counts(self, events: list[Event]) -> list[ReferrerCount]:
        """Count events per referrer hostname, top N by count."""
        by_host: dict[str, int] = {}
        for event in events:
            host = referrer_host(event.referrer)
            by_host[host] = by_host.get(host, 0) + 1
        return [
            ReferrerCount(ref=host, count=count)
            for host, count in _top(by_host, self.top_referrers)
        ]

    def page_counts(self, sessions: list[Session]) -> dict[str, list[PageCount]]:
        """
        Count entry pages, exit pages and visited pages across sessions.

        Returns:
            Dict with "entry", "exit" and "all" rankings, top N each
        """
        entry: dict[str, int] = {}
        exit_: dict[str, int] = {}
        visited: dict[str, int] = {}
        for session in sessions:
            if session.entry_page:
                entry[session.entry_page] = entry.get(session.entry_page, 0) + 1
            if session.exit_page:
                exit_[session.exit_page] = exit_.get(session.exit_page, 0) + 1
            for page in session.pages:
                visited[page] = visited.get(page, 0) + 1

        def ranked(counts: dict[str, int]) -> list[PageCount]:
            return [PageCount(page=p, count=c) for p, c in _top(counts, self.top_pages)]

        return {"entry": ranked(entry), "exit": ranked(exit_), "all": ranked(visited)}

    def breakdowns(self, events: list[Event], sessions: list[Session]) -> Breakdowns:
        """Compute every auxiliary breakdown."""
        pages = self.page_counts(sessions)
        return Breakdowns(
            daily_counts=self.daily_counts(events),
            top_referrers=self.referrer_counts(events),
            top_entry_pages=pages["entry"],
            top_exit_pages=pages["exit"],
            top_pages=pages["all"],
        )
