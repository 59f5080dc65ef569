from __future__ import annotations

import logging
import math
import os
import time
import typing as t
from dataclasses import dataclass

from .models import Item

DEFAULT_TTL_SECONDS = 86400

_logger = logging.getLogger(__name__)


@dataclass
class TTLConfig:
    enabled: bool = True
    default_ttl_seconds: int = DEFAULT_TTL_SECONDS

    @classmethod
    def from_env(cls, environ: t.Optional[t.Mapping[str, str]] = None) -> "TTLConfig":
        env = os.environ if environ is None else environ
        default_ttl = DEFAULT_TTL_SECONDS
        raw = env.get("DEFAULT_TTL")
        if raw:
            try:
                default_ttl = int(raw.strip())
            except ValueError:
                _logger.warning("Ignoring unparseable DEFAULT_TTL=%r, using %d", raw, DEFAULT_TTL_SECONDS)
        return cls(
            enabled=env.get("TTL_ENABLED", "").strip().lower() != "false",
            default_ttl_seconds=default_ttl,
        )


def _now_seconds(now: t.Optional[float]) -> int:
    return math.floor(time.time() if now is None else now)


def parse_positive_int(raw: t.Optional[str]) -> t.Optional[int]:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None


def calculate_expiration(
    duration_seconds: t.Optional[int] = None,
    config: t.Optional[TTLConfig] = None,
    now: t.Optional[float] = None,
) -> int:
    """Return the Unix timestamp `duration_seconds` from now.

    Falls back to the configured default duration, then to 24 hours. Every
    written item therefore carries a concrete expiration.
    """
    if duration_seconds is None:
        cfg = config or TTLConfig.from_env()
        duration_seconds = cfg.default_ttl_seconds if cfg.default_ttl_seconds > 0 else DEFAULT_TTL_SECONDS
    return _now_seconds(now) + duration_seconds


def is_expired(item: Item, config: t.Optional[TTLConfig] = None, now: t.Optional[float] = None) -> bool:
    cfg = config or TTLConfig.from_env()
    if not cfg.enabled or item.ttl is None:
        return False
    return item.ttl < _now_seconds(now)


def parse_duration_from_source(
    primary: t.Optional[str] = None,
    secondary: t.Optional[str] = None,
) -> t.Optional[int]:
    """Pick the first candidate that parses to a positive integer.

    Invalid candidates are logged and skipped; None means "use the default".
    """
    for source, raw in (("primary", primary), ("secondary", secondary)):
        if raw is None or raw == "":
            continue
        value = parse_positive_int(raw)
        if value is not None:
            return value
        _logger.warning("Ignoring invalid TTL duration from %s source: %r", source, raw)
    return None
