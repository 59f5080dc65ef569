from __future__ import annotations

import json
import logging
import typing as t

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..core.errors import StorageUnavailable
from ..core.models import Item
from .base import Repository

_logger = logging.getLogger(__name__)


class RedisRepository(Repository):
    """Redis-backed repository.

    - Items are stored as JSON strings at key: `{prefix}:item:{key}`
    - With `native_expiry`, items carrying a ttl are written with `EXAT ttl`
      so Redis evicts them on its own; reads still check the ttl.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        prefix: str = "kv",
        native_expiry: bool = True,
        client: t.Optional[Redis] = None,
    ) -> None:
        self._url = url
        self._prefix = prefix.rstrip(":")
        self._native_expiry = native_expiry
        self._redis = client if client is not None else Redis.from_url(url, decode_responses=True)

    def _item_key(self, key: str) -> str:
        return f"{self._prefix}:item:{key}"

    async def get_item(self, key: str) -> t.Optional[Item]:
        try:
            raw = await self._redis.get(self._item_key(key))
        except RedisError as exc:
            raise StorageUnavailable(f"Failed to read item {key!r}") from exc
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        try:
            return Item.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise StorageUnavailable(f"Corrupt record for item {key!r}") from exc

    async def put_item(self, key: str, value: str, ttl: t.Optional[int]) -> Item:
        item = Item(key=key, value=value, ttl=ttl)
        payload = json.dumps(item.to_dict())
        try:
            if self._native_expiry and ttl is not None:
                await self._redis.set(self._item_key(key), payload, exat=ttl)
            else:
                await self._redis.set(self._item_key(key), payload)
        except RedisError as exc:
            raise StorageUnavailable(f"Failed to write item {key!r}") from exc
        return item

    async def delete_item(self, key: str) -> None:
        try:
            removed = await self._redis.delete(self._item_key(key))
        except RedisError as exc:
            raise StorageUnavailable(f"Failed to delete item {key!r}") from exc
        if not removed:
            _logger.debug("delete_item: key %s was not present", key)

    async def is_healthy(self) -> bool:
        try:
            pong = await self._redis.ping()
            return bool(pong)
        except RedisError:
            return False

    async def close(self) -> None:
        await self._redis.aclose()
