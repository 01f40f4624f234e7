# ==============================================================================
# Event Store Abstract Base Class
# ==============================================================================
"""
Repository ABC for raw event persistence.

The event store is a durable, append-only queue of event records. It supports
exactly three operations: append one record, read the whole collection, and
clear the whole collection. Records are never updated in place.

Concrete implementations live in infrastructure/stores/.
"""

from abc import ABC, abstractmethod


class EventStore(ABC):
    """Append-only collection of raw event records.

    Records are JSON-serializable dicts in the tracking wire format
    (camelCase keys). Implementations must not lose writes under concurrent
    appends; readers get a snapshot that may or may not include appends made
    while the read was in progress.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Short backend name used in logs and API responses.

        Examples:
            'valkey'
            'file'
            'memory'
        """
        ...

    @abstractmethod
    def append(self, record: dict) -> None:
        """
        Append one event record.

        Args:
            record: Event dict to persist

        Raises:
            StoreUnavailableError: If the backend cannot be written
        """
        ...

    @abstractmethod
    def read_all(self) -> list[dict]:
        """
        Read every stored record.

        Returns:
            List of event dicts in storage order (may be empty)

        Raises:
            StoreUnavailableError: If the backend cannot be read. A store that
                has never been written returns an empty list instead.
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """
        Remove every stored record.

        Raises:
            StoreUnavailableError: If the backend cannot be cleared
        """
        ...

    def close(self) -> None:
        """Release any held resources. No-op by default."""
        return None
