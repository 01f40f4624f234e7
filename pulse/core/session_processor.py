# ==============================================================================
# Session Processor - Pure Domain Logic
# ==============================================================================
"""
Pure session reconstruction logic with no external dependencies.

This module partitions an unordered collection of events into sessions:
- Grouping by session fingerprint
- Chronological ordering within each fingerprint
- Inactivity timeout detection
- Session construction (duration, page path, entry/exit, bounce)

Nothing here performs I/O. Sessions are rebuilt from scratch on every call,
so the result depends only on the input events and the timeout.
"""

import logging
import math
from datetime import datetime, timedelta

from pulse.core.models import EPOCH, Event, Session, parse_timestamp

logger = logging.getLogger(__name__)

# Fingerprint assigned to events that arrive without one. All such events
# share a single bucket.
UNKNOWN_FINGERPRINT = "unknown"

DEFAULT_TIMEOUT_MINUTES = 30


class SessionProcessor:
    """
    Rebuilds visitor sessions from raw events.

    A new session starts whenever the gap between two consecutive events of
    the same fingerprint is strictly greater than the inactivity timeout. A gap
    exactly equal to the timeout keeps both events in one session.
    """

    def __init__(self, timeout_minutes: float = DEFAULT_TIMEOUT_MINUTES):
        """
        Initialize session processor.

        Args:
            timeout_minutes: Session inactivity timeout in minutes.

        Raises:
            ValueError: If the timeout is negative
        """
        if timeout_minutes < 0:
            raise ValueError(f"timeout_minutes must be non-negative, got {timeout_minutes}")
        self.timeout = timedelta(minutes=timeout_minutes)

    def is_session_expired(self, last_activity: datetime, event_time: datetime) -> bool:
        """
        Check if the gap since the last event exceeds the inactivity timeout.

        Args:
            last_activity: Time of the last event in the open session
            event_time: Time of the incoming event

        Returns:
            True if the incoming event must start a new session
        """
        return event_time - last_activity > self.timeout

    def reconstruct(self, events: list[Event]) -> list[Session]:
        """
        Partition events into sessions.

        Sessions are grouped by fingerprint in first-seen order; within a
        fingerprint they are chronological and numbered from 0.

        Args:
            events: Events in any order

        Returns:
            Reconstructed sessions (empty for empty input)
        """
        groups: dict[str, list[tuple[datetime, Event]]] = {}
        for event in events:
            fingerprint = event.session_fingerprint or UNKNOWN_FINGERPRINT
            groups.setdefault(fingerprint, []).append((self._event_time(event), event))

        sessions: list[Session] = []
        for fingerprint, timed in groups.items():
            # list.sort is stable, so equal timestamps keep their input order
            timed.sort(key=lambda pair: pair[0])

            bucket: list[tuple[datetime, Event]] = []
            sequence = 0
            for event_time, event in timed:
                if bucket and self.is_session_expired(bucket[-1][0], event_time):
                    sessions.append(self.build_session(fingerprint, sequence, bucket))
                    sequence += 1
                    bucket = []
                bucket.append((event_time, event))

            if bucket:
                sessions.append(self.build_session(fingerprint, sequence, bucket))

        return sessions

    @staticmethod
    def build_session(
        fingerprint: str, sequence: int, bucket: list[tuple[datetime, Event]]
    ) -> Session:
        """
        Build a session from a chronologically ordered bucket.

        Args:
            fingerprint: Fingerprint shared by every event in the bucket
            sequence: 0-based index of this session for the fingerprint
            bucket: Non-empty list of (event_time, event) pairs, sorted

        Returns:
            Session with derived duration, pages and bounce flag
        """
        start = bucket[0][0]
        end = bucket[-1][0]
        duration = max(0, math.floor((end - start).total_seconds() + 0.5))

        pages: list[str] = []
        for _, event in bucket:
            if event.page and (not pages or pages[-1] != event.page):
                pages.append(event.page)

        return Session(
            id=f"{fingerprint}:{sequence}",
            session_id_base=fingerprint,
            start=start,
            end=end,
            duration_seconds=duration,
            pages=pages,
            entry_page=pages[0] if pages else "",
            exit_page=pages[-1] if pages else "",
            is_bounce=len(bucket) == 1,
            views=[event for _, event in bucket],
        )

    @staticmethod
    def _event_time(event: Event) -> datetime:
        event_time = event.event_time
        if event_time is None:
            logger.warning(
                "Malformed timestamp %r on event %s, ordering as epoch",
                event.timestamp,
                event.id,
            )
            return EPOCH
        return event_time
