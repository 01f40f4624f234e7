# ==============================================================================
# Event Store Factory
# ==============================================================================
"""
Factory for the process-wide event store.

Uses STORE_BACKENDS (via config) to decide which backends make up the chain.
The store and its Valkey client are built once, on first use, and live for
the rest of the process. When Valkey is listed but VALKEY_URL is not set the
backend is left out of the chain rather than failing.
"""

import logging
from functools import lru_cache

from pulse.base import EventStore
from pulse.infrastructure.stores.fallback import FallbackEventStore
from pulse.utils.config import BackendName, Settings, get_settings

logger = logging.getLogger(__name__)


def build_backend(name: BackendName, settings: Settings) -> EventStore | None:
    """
    Build a single backend by name.

    Args:
        name: Backend name ("valkey", "file" or "memory")
        settings: Application settings

    Returns:
        EventStore instance, or None if the backend is not configured

    Raises:
        ValueError: If the backend name is unknown
    """
    match name:
        case "valkey":
            if not settings.valkey.is_configured:
                logger.info("Valkey not configured, skipping valkey backend")
                return None
            from pulse.infrastructure.stores.valkey import ValkeyEventStore

            return ValkeyEventStore()
        case "file":
            from pulse.infrastructure.stores.file import JsonFileEventStore

            return JsonFileEventStore(settings.file_store.path)
        case "memory":
            from pulse.infrastructure.stores.memory import InMemoryEventStore

            return InMemoryEventStore()
        case _:
            raise ValueError(
                f"Unknown store backend: '{name}'.\nValid options are: valkey, file, memory"
            )


def create_event_store(settings: Settings | None = None) -> FallbackEventStore:
    """
    Build a new event store chain from settings.

    Falls back to the file store alone if no configured backend remains.
    """
    settings = settings or get_settings()
    backends = []
    for name in settings.store.backends:
        backend = build_backend(name, settings)
        if backend is not None:
            backends.append(backend)

    if not backends:
        logger.warning("No store backend available, falling back to file store")
        from pulse.infrastructure.stores.file import JsonFileEventStore

        backends.append(JsonFileEventStore(settings.file_store.path))

    store = FallbackEventStore(backends)
    logger.info("Event store: %s", store.name)
    return store


@lru_cache
def get_event_store() -> FallbackEventStore:
    """
    Get the process-wide event store.

    Built once and cached; call get_event_store.cache_clear() to rebuild
    after changing settings.
    """
    return create_event_store()
