# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Adapters for external services (ports-and-adapters architecture).

This module contains concrete implementations of the base contracts:
- stores/ - Event store adapters (Valkey, JSON file, in-memory, fallback chain)
"""

from pulse.infrastructure.stores import (
    FallbackEventStore,
    InMemoryEventStore,
    JsonFileEventStore,
    ValkeyEventStore,
    create_event_store,
    get_event_store,
)

__all__ = [
    "FallbackEventStore",
    "InMemoryEventStore",
    "JsonFileEventStore",
    "ValkeyEventStore",
    "create_event_store",
    "get_event_store",
]
