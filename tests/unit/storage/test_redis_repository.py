"""Unit tests for RedisRepository against a mocked client."""

import json
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from kv_store.core.errors import StorageUnavailable
from kv_store.core.models import Item
from kv_store.storage.redis_adapter import RedisRepository


@pytest.mark.asyncio
class TestRedisRepository:
    """Test RedisRepository key layout, expiry and error mapping."""

    async def test_put_item_uses_exat(self, mock_redis_client):
        repo = RedisRepository(prefix="kv", client=mock_redis_client)

        item = await repo.put_item("alpha", "one", 1700000000)

        assert item == Item("alpha", "one", 1700000000)
        mock_redis_client.set.assert_awaited_once()
        args, kwargs = mock_redis_client.set.call_args
        assert args[0] == "kv:item:alpha"
        assert json.loads(args[1]) == {"key": "alpha", "value": "one", "ttl": 1700000000}
        assert kwargs == {"exat": 1700000000}

    async def test_put_item_without_native_expiry(self, mock_redis_client):
        repo = RedisRepository(client=mock_redis_client, native_expiry=False)

        await repo.put_item("alpha", "one", 1700000000)

        _, kwargs = mock_redis_client.set.call_args
        assert "exat" not in kwargs

    async def test_put_item_without_ttl(self, mock_redis_client):
        repo = RedisRepository(client=mock_redis_client)

        await repo.put_item("alpha", "one", None)

        args, kwargs = mock_redis_client.set.call_args
        assert json.loads(args[1]) == {"key": "alpha", "value": "one"}
        assert kwargs == {}

    async def test_prefix_trailing_colon_stripped(self, mock_redis_client):
        repo = RedisRepository(prefix="app:", client=mock_redis_client)
        await repo.get_item("alpha")
        mock_redis_client.get.assert_awaited_once_with("app:item:alpha")

    async def test_get_item_decodes_record(self, mock_redis_client):
        mock_redis_client.get.return_value = json.dumps({"key": "alpha", "value": "one", "ttl": 42})
        repo = RedisRepository(client=mock_redis_client)

        assert await repo.get_item("alpha") == Item("alpha", "one", 42)

    async def test_get_item_decodes_bytes(self, mock_redis_client):
        mock_redis_client.get.return_value = b'{"key": "alpha", "value": "one"}'
        repo = RedisRepository(client=mock_redis_client)

        assert await repo.get_item("alpha") == Item("alpha", "one", None)

    @pytest.mark.parametrize("raw", ["not json", json.dumps({"value": "one"}), json.dumps([1, 2])])
    async def test_corrupt_record_becomes_storage_unavailable(self, mock_redis_client, raw):
        mock_redis_client.get.return_value = raw
        repo = RedisRepository(client=mock_redis_client)

        with pytest.raises(StorageUnavailable, match="Corrupt record"):
            await repo.get_item("alpha")

    async def test_get_missing_returns_none(self, mock_redis_client):
        repo = RedisRepository(client=mock_redis_client)
        assert await repo.get_item("missing") is None

    async def test_delete_missing_is_not_an_error(self, mock_redis_client):
        mock_redis_client.delete.return_value = 0
        repo = RedisRepository(client=mock_redis_client)

        await repo.delete_item("missing")

        mock_redis_client.delete.assert_awaited_once_with("kv:item:missing")

    @pytest.mark.parametrize("operation", ["get", "set", "delete"])
    async def test_backend_errors_become_storage_unavailable(self, mock_redis_client, operation):
        getattr(mock_redis_client, operation).side_effect = RedisConnectionError("connection refused")
        repo = RedisRepository(client=mock_redis_client)

        with pytest.raises(StorageUnavailable) as exc_info:
            if operation == "get":
                await repo.get_item("alpha")
            elif operation == "set":
                await repo.put_item("alpha", "one", 1)
            else:
                await repo.delete_item("alpha")

        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    async def test_is_healthy(self, mock_redis_client):
        repo = RedisRepository(client=mock_redis_client)
        assert await repo.is_healthy() is True

        mock_redis_client.ping = AsyncMock(side_effect=RedisConnectionError("down"))
        assert await repo.is_healthy() is False

    async def test_close(self, mock_redis_client):
        repo = RedisRepository(client=mock_redis_client)
        await repo.close()
        mock_redis_client.aclose.assert_awaited_once()
