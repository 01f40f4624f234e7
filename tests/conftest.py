# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- fakeredis-backed ValkeyEventStore instances
- File and in-memory stores rooted in a per-test temp directory
- Settings and store caches reset around every test
"""

import fakeredis
import pytest

from pulse.infrastructure.stores import (
    InMemoryEventStore,
    JsonFileEventStore,
    ValkeyEventStore,
    get_event_store,
)
from pulse.utils.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point the default store chain at a temp file and reset cached singletons."""
    monkeypatch.delenv("VALKEY_URL", raising=False)
    monkeypatch.setenv("STORE_BACKENDS", '["file"]')
    monkeypatch.setenv("FILE_STORE_PATH", str(tmp_path / "db.json"))
    get_settings.cache_clear()
    get_event_store.cache_clear()
    yield
    get_settings.cache_clear()
    get_event_store.cache_clear()


@pytest.fixture()
def fake_redis():
    """A clean fakeredis instance for each test.

    Uses decode_responses=True to match the real Valkey client configuration.
    """
    server = fakeredis.FakeServer()
    client = fakeredis.FakeRedis(server=server, decode_responses=True)
    yield client
    client.flushall()
    client.close()


@pytest.fixture()
def valkey_store(fake_redis):
    """A ValkeyEventStore talking to fakeredis instead of a real server."""
    return ValkeyEventStore(client=fake_redis, key="test:events", max_events=100)


@pytest.fixture()
def file_store(tmp_path):
    """A JsonFileEventStore writing into the test's temp directory."""
    return JsonFileEventStore(tmp_path / "data" / "db.json")


@pytest.fixture()
def memory_store():
    """An empty InMemoryEventStore."""
    return InMemoryEventStore()
