from .base import InMemoryRepository, Repository
from .factory import RepositoryFactory, build_repository
from .redis_adapter import RedisRepository

__all__ = ["Repository", "InMemoryRepository", "RedisRepository", "RepositoryFactory", "build_repository"]
