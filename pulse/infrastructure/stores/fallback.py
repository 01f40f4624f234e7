# ==============================================================================
# Fallback Event Store
# ==============================================================================
"""
EventStore that chains several backends in capability order.

- append: the first backend that accepts the record wins; failures are logged
  and the next backend is tried
- read_all: the first backend that answers supplies the snapshot
- clear: every backend is cleared; failures are logged and reported

Whichever backend answers, callers see one unified event collection.
"""

import logging

from pulse.base import EventStore, StoreUnavailableError

logger = logging.getLogger(__name__)


class FallbackEventStore(EventStore):
    """Ordered chain of event stores."""

    def __init__(self, backends: list[EventStore]):
        """
        Initialize the chain.

        Args:
            backends: Stores to try, most preferred first

        Raises:
            ValueError: If no backends are given
        """
        if not backends:
            raise ValueError("FallbackEventStore needs at least one backend")
        self._backends = list(backends)

    @property
    def name(self) -> str:
        return "+".join(backend.name for backend in self._backends)

    @property
    def backends(self) -> list[EventStore]:
        return list(self._backends)

    def append(self, record: dict) -> None:
        error: StoreUnavailableError | None = None
        for backend in self._backends:
            try:
                backend.append(record)
            except StoreUnavailableError as e:
                logger.error("Append to %s failed, trying next backend: %s", backend.name, e)
                error = e
                continue
            logger.debug("Event appended to %s", backend.name)
            return
        raise error

    def read_all(self) -> list[dict]:
        error: StoreUnavailableError | None = None
        for backend in self._backends:
            try:
                return backend.read_all()
            except StoreUnavailableError as e:
                logger.error("Read from %s failed, trying next backend: %s", backend.name, e)
                error = e
        raise error

    def clear_each(self) -> dict[str, bool]:
        """
        Clear every backend, continuing past failures.

        Returns:
            Dict mapping backend name to whether it was cleared
        """
        results: dict[str, bool] = {}
        for backend in self._backends:
            try:
                backend.clear()
                results[backend.name] = True
            except StoreUnavailableError as e:
                logger.error("Clear of %s failed: %s", backend.name, e)
                results[backend.name] = False
        return results

    def clear(self) -> None:
        results = self.clear_each()
        if not any(results.values()):
            raise StoreUnavailableError(self.name, "no backend could be cleared")

    def close(self) -> None:
        for backend in self._backends:
            backend.close()
