# ==============================================================================
# Event Ingestion
# ==============================================================================
"""
Validates one incoming tracking payload and appends it to the event store.

Ingestion is where records are normalized:
- Required fields (page, userAgent, timestamp) are enforced
- A unique id is assigned
- The session fingerprint is derived from client address and user agent
- Unknown top-level keys are dropped; the properties bag is kept as-is
"""

import hashlib
import logging
import uuid
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from pulse.base import EventStore, IngestionError
from pulse.core.models import EventKind

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("page", "userAgent", "timestamp")


class TrackPayload(BaseModel):
    """Body posted by the tracking snippet."""

    page: str = Field(..., min_length=1)
    user_agent: str = Field(..., alias="userAgent", min_length=1)
    timestamp: str = Field(..., min_length=1)
    referrer: str = ""
    event_kind: EventKind = Field(EventKind.PAGEVIEW, alias="type")
    screen: dict[str, Any] | None = None
    viewport: dict[str, Any] | None = None
    device_type: str | None = Field(None, alias="deviceType")
    performance: dict[str, Any] | None = None
    time_on_page: float | None = Field(None, alias="timeOnPage")
    scroll_depth: float | None = Field(None, alias="scrollDepth")
    event_name: str | None = Field(None, alias="eventName")
    properties: dict[str, Any] | None = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


def derive_fingerprint(client_ip: str, user_agent: str) -> str:
    """
    Derive the session fingerprint for a visitor context.

    Args:
        client_ip: Client network address (may be empty)
        user_agent: Browser user agent string

    Returns:
        SHA-1 hex digest of "{client_ip}|{user_agent}"
    """
    return hashlib.sha1(f"{client_ip}|{user_agent}".encode("utf-8")).hexdigest()


def resolve_client_ip(forwarded_for: str | None, peer: str | None) -> str:
    """First X-Forwarded-For hop, else the socket peer address, else ""."""
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return peer or ""


class EventIngestor:
    """Turns tracking payloads into stored event records."""

    def __init__(self, store: EventStore):
        self._store = store

    def validate(self, payload: Any) -> TrackPayload:
        """
        Validate a raw payload.

        Raises:
            IngestionError: If required fields are missing or malformed
        """
        if not isinstance(payload, dict):
            raise IngestionError("Missing required fields")
        if any(not payload.get(field) for field in REQUIRED_FIELDS):
            raise IngestionError("Missing required fields")
        try:
            return TrackPayload.model_validate(payload)
        except ValidationError as e:
            raise IngestionError(f"Invalid event payload: {e.error_count()} invalid field(s)") from e

    def ingest(self, payload: Any, client_ip: str = "") -> dict:
        """
        Validate, normalize and append one event.

        Args:
            payload: Decoded JSON body from the tracking snippet
            client_ip: Client network address used for fingerprinting

        Returns:
            The record as stored

        Raises:
            IngestionError: If the payload is rejected
            StoreUnavailableError: If no store backend accepted the record
        """
        track = self.validate(payload)
        record = {
            "id": str(uuid.uuid4()),
            **track.model_dump(mode="json", by_alias=True, exclude_none=True),
            "sessionId": derive_fingerprint(client_ip, track.user_agent),
        }
        self._store.append(record)
        logger.info("Tracked %s page=%s", record["type"], record["page"])
        return record
