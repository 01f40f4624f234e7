# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no I/O.

This module contains:
- Domain models (Event, Session, Summary, Breakdowns)
- Session reconstruction (grouping, ordering, timeout bucketing)
- Aggregation (totals, bounce rate, pages per session, breakdowns)
- Report serialization (report mode and passthrough mode)

All code here is framework-agnostic and easily unit-testable.
"""

from pulse.core.aggregator import Aggregator
from pulse.core.models import (
    Breakdowns,
    DailyCount,
    Event,
    EventKind,
    PageCount,
    ReferrerCount,
    Session,
    Summary,
    parse_timestamp,
)
from pulse.core.report import build_report, empty_report, load_events, passthrough
from pulse.core.session_processor import SessionProcessor

__all__ = [
    "Aggregator",
    "Breakdowns",
    "DailyCount",
    "Event",
    "EventKind",
    "PageCount",
    "ReferrerCount",
    "Session",
    "SessionProcessor",
    "Summary",
    "build_report",
    "empty_report",
    "load_events",
    "parse_timestamp",
    "passthrough",
]
