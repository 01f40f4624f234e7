# ==============================================================================
# Stats Query Service
# ==============================================================================
"""
Reads one snapshot from the event store and hands it to the core engine.

The store is read exactly once per query. Store failures propagate as
StoreUnavailableError so callers can tell "no data yet" (a zero report)
apart from "backend error".
"""

import logging

from pulse.core.report import build_report, passthrough
from pulse.infrastructure.stores import FallbackEventStore
from pulse.utils.config import SessionSettings, get_settings

logger = logging.getLogger(__name__)


class StatsService:
    """Query-side entry points: report mode, passthrough mode and clear."""

    def __init__(self, store: FallbackEventStore, session_settings: SessionSettings | None = None):
        self._store = store
        self._session = session_settings or get_settings().session

    def report(self, include_breakdowns: bool = False) -> dict:
        """
        Aggregate report over the current snapshot.

        An empty store yields the zero report; requested breakdowns are
        present as empty lists so the response shape never depends on data.
        """
        return build_report(
            self._store.read_all(),
            timeout_minutes=self._session.timeout_minutes,
            include_breakdowns=include_breakdowns,
            top_referrers=self._session.top_referrers,
            top_pages=self._session.top_pages,
        )

    def events(self) -> list[dict]:
        """Raw stored events, unmodified."""
        return passthrough(self._store.read_all())

    def clear(self) -> dict[str, bool]:
        """Empty every backend; returns per-backend success."""
        results = self._store.clear_each()
        logger.info("Cleared event store: %s", results)
        return results
