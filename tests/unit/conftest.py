"""Shared fixtures and mocks for unit tests."""

from __future__ import annotations

import time
from unittest.mock import AsyncMock

import pytest

from kv_store.core.models import Item
from kv_store.core.ttl import TTLConfig
from kv_store.storage.base import InMemoryRepository


@pytest.fixture
def now() -> int:
    return int(time.time())


@pytest.fixture
def ttl_config():
    """Explicit TTL config so tests do not depend on the environment."""
    return TTLConfig(enabled=True, default_ttl_seconds=86400)


@pytest.fixture
def memory_repository():
    return InMemoryRepository()


@pytest.fixture
def sample_item(now):
    return Item(key="test-key", value="test-value", ttl=now + 3600)


@pytest.fixture
def expired_item(now):
    return Item(key="old-key", value="old-value", ttl=now - 10)


@pytest.fixture
def clean_ttl_env(monkeypatch):
    """Remove TTL settings from the environment."""
    monkeypatch.delenv("DEFAULT_TTL", raising=False)
    monkeypatch.delenv("TTL_ENABLED", raising=False)


@pytest.fixture
def mock_redis_client():
    """Mock Redis client."""
    client = AsyncMock()
    client.ping = AsyncMock(return_value=True)
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.aclose = AsyncMock(return_value=None)
    return client


@pytest.fixture
def http_scope():
    """Create a sample HTTP scope."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/item/test-key",
        "raw_path": b"/item/test-key",
        "query_string": b"",
        "root_path": "",
        "headers": [(b"host", b"testserver")],
        "server": ("127.0.0.1", 3000),
        "client": ("127.0.0.1", 12345),
        "state": {},
    }


@pytest.fixture
def mock_asgi_app():
    """Mock ASGI application that always answers 200."""

    async def app(scope, receive, send):
        await send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [[b"content-type", b"text/plain"]],
            }
        )
        await send({"type": "http.response.body", "body": b"inner"})

    return app
