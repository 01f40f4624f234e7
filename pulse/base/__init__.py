# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Contracts for the ports-and-adapters architecture.

The core engine only ever sees plain event collections; everything that
touches storage goes through these interfaces.
"""

from pulse.base.errors import IngestionError, PulseError, StoreUnavailableError
from pulse.base.repositories import EventStore

__all__ = [
    "EventStore",
    "IngestionError",
    "PulseError",
    "StoreUnavailableError",
]
