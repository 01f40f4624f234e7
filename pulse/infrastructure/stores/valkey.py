# ==============================================================================
# Valkey Event Store Implementation
# ==============================================================================
"""
Valkey/Redis implementation of the EventStore interface.

Events are kept in a single list, one JSON document per element:
- Appends use RPUSH, which is atomic, so concurrent writers never lose events
- The list is trimmed to the newest max_events entries after each append
- Reads fetch the whole list with LRANGE
- Clear deletes the key

Shared across server instances, unlike the file store.
"""

import json
import logging

import redis
from redis.backoff import ExponentialBackoff
from redis.exceptions import RedisError
from redis.retry import Retry

from pulse.base import EventStore, StoreUnavailableError
from pulse.utils.config import get_settings
from pulse.utils.retry import REDIS_RETRY_EXCEPTIONS, VALKEY_RETRIES, retry_light

logger = logging.getLogger(__name__)


def get_valkey_client(url: str, socket_timeout: int = 10) -> redis.Redis:
    """
    Get a Valkey/Redis client connection.

    Configured with:
    - Socket timeouts for fast failure detection
    - Automatic retries with exponential backoff for transient failures
    - Health check interval to keep connections alive

    Args:
        url: Valkey/Redis connection URL
        socket_timeout: Socket timeout in seconds

    Returns:
        redis.Redis client instance
    """
    retry_strategy = Retry(ExponentialBackoff(cap=8, base=1), retries=VALKEY_RETRIES)
    return redis.from_url(
        url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
        retry=retry_strategy,
        retry_on_error=list(REDIS_RETRY_EXCEPTIONS),
        health_check_interval=30,
    )


class ValkeyEventStore(EventStore):
    """
    Valkey/Redis implementation of EventStore.

    All values are stored as JSON strings and deserialized on retrieval.
    Elements that fail to decode are skipped with a warning.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        key: str | None = None,
        max_events: int | None = None,
    ):
        """
        Initialize Valkey event store.

        Args:
            client: Redis client instance. If None, connects using settings.
            key: List key holding the events (default: from settings)
            max_events: Newest events to keep (default: from settings)
        """
        settings = get_settings().valkey
        if client is None:
            if not settings.url:
                raise ValueError("Valkey URL is not configured (set VALKEY_URL)")
            client = get_valkey_client(settings.url, settings.socket_timeout)

        self._client = client
        self._key = key or settings.events_key
        self._max_events = max_events or settings.max_events

    @property
    def name(self) -> str:
        return "valkey"

    @property
    def client(self) -> redis.Redis:
        """Get the underlying Redis client for advanced operations."""
        return self._client

    @property
    def key(self) -> str:
        return self._key

    def append(self, record: dict) -> None:
        """Append one event and trim the list to the newest max_events."""
        payload = json.dumps(record)
        try:
            pipe = self._client.pipeline()
            pipe.rpush(self._key, payload)
            pipe.ltrim(self._key, -self._max_events, -1)
            pipe.execute()
        except RedisError as e:
            raise StoreUnavailableError(self.name, f"append failed: {e}") from e

    def read_all(self) -> list[dict]:
        """Read every event in the list, oldest first."""
        try:
            values = self._client.lrange(self._key, 0, -1)
        except RedisError as e:
            raise StoreUnavailableError(self.name, f"read failed: {e}") from e

        records = []
        for value in values:
            try:
                records.append(json.loads(value))
            except json.JSONDecodeError:
                logger.warning("Failed to decode JSON event in %s", self._key)
        return records

    def clear(self) -> None:
        """Delete the event list."""
        try:
            self._client.delete(self._key)
        except RedisError as e:
            raise StoreUnavailableError(self.name, f"clear failed: {e}") from e

    def count(self) -> int:
        """Number of events currently in the list."""
        try:
            return self._client.llen(self._key)
        except RedisError as e:
            raise StoreUnavailableError(self.name, f"count failed: {e}") from e

    def ping(self) -> bool:
        """
        Check if Valkey is reachable.

        Returns:
            True if ping succeeds, False otherwise
        """

        @retry_light(REDIS_RETRY_EXCEPTIONS, logger)
        def _ping() -> bool:
            return bool(self._client.ping())

        try:
            return _ping()
        except RedisError:
            return False

    def close(self) -> None:
        """Close the connection."""
        self._client.close()
