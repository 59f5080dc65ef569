from __future__ import annotations

import typing as t
from abc import ABC, abstractmethod

from ..core.models import Item


class Repository(ABC):
    """Key-value storage contract shared by every backend.

    - `get_item` returns None for a missing key instead of raising.
    - `put_item` overwrites and returns the item as persisted.
    - `delete_item` is idempotent.

    Backend failures surface as `StorageUnavailable`. Expiry is not checked
    here; callers evaluate `Item.ttl` on read.
    """

    @abstractmethod
    async def get_item(self, key: str) -> t.Optional[Item]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def put_item(self, key: str, value: str, ttl: t.Optional[int]) -> Item:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def delete_item(self, key: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    async def is_healthy(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    async def close(self) -> None:
        return None


class InMemoryRepository(Repository):
    """A dict-backed repository for dev/test.

    Expired records are kept until overwritten or deleted, like a durable
    store whose eviction has not run yet.
    """

    def __init__(self) -> None:
        self._items: t.Dict[str, Item] = {}

    async def get_item(self, key: str) -> t.Optional[Item]:
        return self._items.get(key)

    async def put_item(self, key: str, value: str, ttl: t.Optional[int]) -> Item:
        item = Item(key=key, value=value, ttl=ttl)
        self._items[key] = item
        return item

    async def delete_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def is_healthy(self) -> bool:
        return True

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
