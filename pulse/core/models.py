# ==============================================================================
# Analytics Domain Models
# ==============================================================================
"""
Pydantic models for tracked events, reconstructed sessions and reports.

These models are used for:
- Validating records read back from an event store
- Serializing sessions and reports to the dashboard's JSON contract
- Type safety throughout the engine

JSON keys follow the tracking snippet's camelCase wire format. Python
attributes are snake_case and can be populated either way.

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken to be UTC. A trailing 'Z' is accepted.

    Args:
        value: Timestamp string (anything else counts as malformed)

    Returns:
        Aware datetime in UTC, or None if the value cannot be parsed
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # OverflowError: the offset pushes the instant outside datetime's range
        return None


class EventKind(str, Enum):
    """Event kinds emitted by the tracking snippet."""

    PAGEVIEW = "pageview"
    PAGE_UNLOAD = "page_unload"
    CUSTOM_EVENT = "custom_event"
    OUTBOUND_CLICK = "outbound_click"


class Event(BaseModel):
    """
    A single recorded browser activity.

    Only the grouping, ordering and page fields are interpreted by the engine.
    Everything else (user agent, device data, custom properties, unknown keys)
    is opaque payload carried through unchanged.

    Attributes:
        id: Unique identifier assigned at ingestion
        session_fingerprint: Key grouping events from one visitor context
        page: Path and query of the page the event pertains to
        event_kind: pageview, page_unload, custom_event or outbound_click
        timestamp: ISO-8601 instant, the sole ordering key
        referrer: Origin URL, or empty for direct traffic
        time_on_page: Seconds spent on the page (unload events)
        scroll_depth: Maximum scroll percentage (unload events)
    """

    id: str | None = Field(None, description="Event identifier")
    session_fingerprint: str | None = Field(
        None, alias="sessionId", description="Session fingerprint"
    )
    page: str = Field("", description="Page path and query")
    event_kind: EventKind = Field(EventKind.PAGEVIEW, alias="type", description="Event kind")
    timestamp: str = Field("", description="ISO-8601 timestamp")
    referrer: str = Field("", description="Referrer URL")
    time_on_page: float | None = Field(None, alias="timeOnPage")
    scroll_depth: float | None = Field(None, alias="scrollDepth")

    # Opaque payload, never type-checked
    user_agent: Any = Field(None, alias="userAgent")
    screen: Any = None
    viewport: Any = None
    device_type: Any = Field(None, alias="deviceType")
    performance: Any = None
    event_name: Any = Field(None, alias="eventName")
    properties: Any = None

    model_config = {"populate_by_name": True, "frozen": True, "extra": "allow"}

    @field_validator("event_kind", mode="before")
    @classmethod
    def _coerce_event_kind(cls, value: Any) -> Any:
        if value is None or value == "":
            return EventKind.PAGEVIEW
        if isinstance(value, EventKind):
            return value
        try:
            return EventKind(value)
        except (TypeError, ValueError):
            logger.warning("Unknown event type %r, treating as pageview", value)
            return EventKind.PAGEVIEW

    @field_validator("page", "referrer", "timestamp", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return ""

    @field_validator("id", "session_fingerprint", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> str | None:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("time_on_page", "scroll_depth", mode="before")
    @classmethod
    def _coerce_measure(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @property
    def event_time(self) -> datetime | None:
        """Parsed timestamp, or None if malformed or missing."""
        return parse_timestamp(self.timestamp)

    def to_record(self) -> dict:
        """Serialize to the camelCase wire format, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, data: dict) -> "Event":
        """Deserialize a record read from an event store."""
        return cls.model_validate(data)


class Session(BaseModel):
    """
    A derived grouping of one fingerprint's events.

    No two consecutive events in a session are further apart than the
    inactivity timeout. Sessions are rebuilt on every query and never stored.

    Attributes:
        id: "{fingerprint}:{sequence}", sequence counting from 0 per fingerprint
        session_id_base: Fingerprint the session was built from
        start: Timestamp of the earliest event
        end: Timestamp of the latest event
        duration_seconds: end - start in whole seconds, never negative
        pages: Visited pages in order with consecutive repeats collapsed
        entry_page: First page, or "" if none
        exit_page: Last page, or "" if none
        is_bounce: True iff the session holds exactly one event
        views: Underlying events in chronological order
    """

    id: str
    session_id_base: str = Field(..., alias="sessionIdBase")
    start: datetime
    end: datetime
    duration_seconds: int = Field(..., alias="durationSeconds")
    pages: list[str] = Field(default_factory=list)
    entry_page: str = Field("", alias="entryPage")
    exit_page: str = Field("", alias="exitPage")
    is_bounce: bool = Field(..., alias="isBounce")
    views: list[Event] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict:
        """Serialize to the dashboard's JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DailyCount(BaseModel):
    """Event count for one UTC calendar day ("unknown" for bad timestamps)."""

    day: str
    count: int


class ReferrerCount(BaseModel):
    """Event count for one referrer hostname ("Direct" for none)."""

    ref: str
    count: int


class PageCount(BaseModel):
    """Session count for one page."""

    page: str
    count: int


class Summary(BaseModel):
    """Site-wide scalar statistics."""

    total_views: int = Field(0, alias="totalViews")
    total_sessions: int = Field(0, alias="totalSessions")
    pages_per_session: float = Field(0, alias="pagesPerSession")
    bounce_rate: float = Field(0, alias="bounceRate")

    model_config = {"populate_by_name": True}


class Breakdowns(BaseModel):
    """Auxiliary breakdowns shown next to the summary."""

    daily_counts: list[DailyCount] = Field(default_factory=list, alias="dailyCounts")
    top_referrers: list[ReferrerCount] = Field(default_factory=list, alias="topReferrers")
    top_entry_pages: list[PageCount] = Field(default_factory=list, alias="topEntryPages")
    top_exit_pages: list[PageCount] = Field(default_factory=list, alias="topExitPages")
    top_pages: list[PageCount] = Field(default_factory=list, alias="topPages")

    model_config = {"populate_by_name": True}
