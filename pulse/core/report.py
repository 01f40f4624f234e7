# ==============================================================================
# Report Serializer
# ==============================================================================
"""
Entry points that turn a snapshot of stored records into a response.

Two modes:
- Report mode (build_report): reconstruct sessions, aggregate, and shape
  the result into the dashboard's report contract
- Passthrough mode (passthrough): return the stored records unchanged

An empty snapshot is not an error: report mode returns the zero-valued report.
"""

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from pulse.core.aggregator import DEFAULT_TOP_PAGES, DEFAULT_TOP_REFERRERS, Aggregator
from pulse.core.models import Breakdowns, Event, Session, Summary
from pulse.core.session_processor import DEFAULT_TIMEOUT_MINUTES, SessionProcessor

logger = logging.getLogger(__name__)


def load_events(records: Iterable[dict]) -> list[Event]:
    """
    Validate stored records into events.

    Records that cannot be validated (anything that is not a JSON object) are
    skipped with a warning so one bad record does not fail the whole report.
    They still count toward total views; see build_report.

    Args:
        records: Raw event dicts from a store

    Returns:
        List of events in input order
    """
    events = []
    for index, record in enumerate(records):
        try:
            events.append(Event.from_record(record))
        except ValidationError as e:
            logger.warning("Skipping invalid event record #%d: %s", index, e)
    return events


def empty_report() -> dict:
    """The zero-valued report returned when there is no data yet."""
    return serialize_report(Summary(), [])


def serialize_report(
    summary: Summary,
    sessions: list[Session],
    breakdowns: Breakdowns | None = None,
) -> dict:
    """
    Shape summary, sessions and optional breakdowns into the report contract.

    Args:
        summary: Headline statistics
        sessions: Reconstructed sessions, already in report order
        breakdowns: Included only when given

    Returns:
        JSON-serializable dict with camelCase keys
    """
    report = summary.model_dump(mode="json", by_alias=True)
    report["sessions"] = [session.to_dict() for session in sessions]
    if breakdowns is not None:
        report.update(breakdowns.model_dump(mode="json", by_alias=True))
    return report


def build_report(
    records: Iterable[dict],
    timeout_minutes: float = DEFAULT_TIMEOUT_MINUTES,
    include_breakdowns: bool = False,
    top_referrers: int = DEFAULT_TOP_REFERRERS,
    top_pages: int = DEFAULT_TOP_PAGES,
) -> dict:
    """
    Report mode: compute the aggregate report for a snapshot.

    Args:
        records: Every stored event record, in any order
        timeout_minutes: Session inactivity timeout
        include_breakdowns: Add daily, referrer and page breakdowns
        top_referrers: Number of referrer hostnames to keep
        top_pages: Number of pages to keep in each page ranking

    Returns:
        Report dict (see serialize_report)
    """
    processor = SessionProcessor(timeout_minutes=timeout_minutes)
    aggregator = Aggregator(top_referrers=top_referrers, top_pages=top_pages)

    records = list(records)
    events = load_events(records)
    sessions = processor.reconstruct(events)
    summary = aggregator.summarize(events, sessions, total_views=len(records))
    breakdowns = aggregator.breakdowns(events, sessions) if include_breakdowns else None

    logger.debug(
        "Built report: %d events, %d sessions",
        summary.total_views,
        summary.total_sessions,
    )
    return serialize_report(summary, sessions, breakdowns)


def passthrough(records: Iterable[dict]) -> list[dict]:
    """Passthrough mode: the stored records as a list, unmodified."""
    return list(records)
