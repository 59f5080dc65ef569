"""Core module: item model, error taxonomy, TTL policy and code extraction."""

from .errors import KVStoreError, MalformedInput, NotFoundError, StorageUnavailable, ValidationError
from .extractor import DEFAULT_DIGIT_COUNT, build_pattern, extract_code
from .models import CharacterClass, Item
from .ttl import (
    DEFAULT_TTL_SECONDS,
    TTLConfig,
    calculate_expiration,
    is_expired,
    parse_duration_from_source,
    parse_positive_int,
)

__all__ = [
    # Models
    "Item",
    "CharacterClass",
    # Errors
    "KVStoreError",
    "ValidationError",
    "MalformedInput",
    "NotFoundError",
    "StorageUnavailable",
    # TTL policy
    "DEFAULT_TTL_SECONDS",
    "TTLConfig",
    "calculate_expiration",
    "is_expired",
    "parse_duration_from_source",
    "parse_positive_int",
    # Extraction
    "DEFAULT_DIGIT_COUNT",
    "build_pattern",
    "extract_code",
]
