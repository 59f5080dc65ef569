"""kv_store

A small key-value storage service over HTTP with per-item expiration and an
endpoint that extracts a verification code from free text and stores it
under a key.
"""

from .core import (
    CharacterClass,
    Item,
    KVStoreError,
    MalformedInput,
    NotFoundError,
    StorageUnavailable,
    TTLConfig,
    ValidationError,
    calculate_expiration,
    extract_code,
    is_expired,
    parse_duration_from_source,
)
from .http import create_app
from .storage import InMemoryRepository, RedisRepository, Repository, RepositoryFactory, build_repository
from .utils import AppConfig

__all__ = [
    "create_app",
    "AppConfig",
    "Item",
    "CharacterClass",
    "TTLConfig",
    "calculate_expiration",
    "is_expired",
    "parse_duration_from_source",
    "extract_code",
    "Repository",
    "InMemoryRepository",
    "RedisRepository",
    "RepositoryFactory",
    "build_repository",
    "KVStoreError",
    "ValidationError",
    "MalformedInput",
    "NotFoundError",
    "StorageUnavailable",
]

__version__ = "0.1.0"
