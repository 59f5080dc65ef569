"""Fixtures for exercising the HTTP app end to end with an in-memory backend."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from starlette.testclient import TestClient

from kv_store.core.errors import StorageUnavailable
from kv_store.core.ttl import TTLConfig
from kv_store.http.app import create_app
from kv_store.storage.base import InMemoryRepository, Repository
from kv_store.utils.config import AppConfig, AuthConfig


@pytest.fixture
def app_config():
    return AppConfig(ttl=TTLConfig(enabled=True, default_ttl_seconds=86400))


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def client(app_config, repository):
    return TestClient(create_app(app_config, repository))


@pytest.fixture
def failing_repository():
    """Repository whose backend is unreachable."""
    repo = AsyncMock(spec=Repository)
    error = StorageUnavailable("connection refused by redis://10.0.0.5:6379")
    repo.get_item.side_effect = error
    repo.put_item.side_effect = error
    repo.delete_item.side_effect = error
    repo.is_healthy.return_value = False
    return repo


@pytest.fixture
def failing_client(app_config, failing_repository):
    return TestClient(create_app(app_config, failing_repository))


@pytest.fixture
def auth_client(repository):
    config = AppConfig(auth=AuthConfig(enabled=True, api_key="secret"))
    return TestClient(create_app(config, repository))
