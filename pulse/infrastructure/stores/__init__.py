# ==============================================================================
# Event Store Infrastructure
# ==============================================================================
"""
Event store implementations for the ports-and-adapters architecture.

Available implementations:
- ValkeyEventStore: Valkey/Redis list shared across server instances
- JsonFileEventStore: JSON array on the local filesystem
- InMemoryEventStore: process-local list
- FallbackEventStore: ordered chain of the above
"""

from pulse.infrastructure.stores.factory import create_event_store, get_event_store
from pulse.infrastructure.stores.fallback import FallbackEventStore
from pulse.infrastructure.stores.file import JsonFileEventStore
from pulse.infrastructure.stores.memory import InMemoryEventStore
from pulse.infrastructure.stores.valkey import ValkeyEventStore, get_valkey_client

__all__ = [
    "FallbackEventStore",
    "InMemoryEventStore",
    "JsonFileEventStore",
    "ValkeyEventStore",
    "create_event_store",
    "get_event_store",
    "get_valkey_client",
]
