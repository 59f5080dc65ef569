from __future__ import annotations

import logging
import typing as t

from ..utils.config import StorageConfig
from .base import InMemoryRepository, Repository
from .redis_adapter import RedisRepository

_logger = logging.getLogger(__name__)


def build_repository(config: StorageConfig) -> Repository:
    kind = config.type.lower()
    if kind == "memory":
        return InMemoryRepository()
    if kind == "redis":
        return RedisRepository(config.url, prefix=config.prefix, native_expiry=config.native_expiry)
    raise ValueError(f"Unknown storage type: {config.type!r} (expected 'memory' or 'redis')")


class RepositoryFactory:
    """Resolves one repository per application on first use.

    Tests call `override()` during setup, before any request is served.
    """

    def __init__(self, config: t.Optional[StorageConfig] = None) -> None:
        self._config = config or StorageConfig()
        self._repository: t.Optional[Repository] = None
        self._resolved = False

    def override(self, repository: Repository) -> None:
        if self._resolved:
            raise RuntimeError("Repository already resolved; override it before first use")
        self._repository = repository

    def get(self) -> Repository:
        if self._repository is None:
            self._repository = build_repository(self._config)
            _logger.info("Using %s storage backend", type(self._repository).__name__)
        self._resolved = True
        return self._repository

    async def close(self) -> None:
        if self._repository is not None:
            await self._repository.close()
