# ==============================================================================
# In-Memory Event Store Implementation
# ==============================================================================
"""
Process-local EventStore, for tests and throwaway servers.
"""

import copy
import threading

from pulse.base import EventStore


class InMemoryEventStore(EventStore):
    """Event store holding records in a list guarded by a lock."""

    def __init__(self, records: list[dict] | None = None):
        self._records: list[dict] = list(records or [])
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "memory"

    def append(self, record: dict) -> None:
        with self._lock:
            self._records.append(copy.deepcopy(record))

    def read_all(self) -> list[dict]:
        # Copies, so callers cannot mutate stored records
        with self._lock:
            return copy.deepcopy(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
