# ==============================================================================
# Application Services
# ==============================================================================
"""
Collaborators around the core engine: ingestion and querying.
"""

from pulse.services.ingestion import (
    EventIngestor,
    TrackPayload,
    derive_fingerprint,
    resolve_client_ip,
)
from pulse.services.stats import StatsService

__all__ = [
    "EventIngestor",
    "StatsService",
    "TrackPayload",
    "derive_fingerprint",
    "resolve_client_ip",
]
