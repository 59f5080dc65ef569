from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..core.ttl import TTLConfig


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class StorageConfig:
    type: str = "memory"  # memory | redis
    url: str = "redis://localhost:6379/0"
    prefix: str = "kv"
    native_expiry: bool = True


@dataclass
class AuthConfig:
    enabled: bool = False
    api_key: Optional[str] = None
    header_name: str = "x-api-key"


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"


@dataclass
class AppConfig:
    storage: StorageConfig = dataclasses.field(default_factory=StorageConfig)
    ttl: TTLConfig = dataclasses.field(default_factory=TTLConfig)
    auth: AuthConfig = dataclasses.field(default_factory=AuthConfig)
    server: ServerConfig = dataclasses.field(default_factory=ServerConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        def build(dc_cls, key):
            values = data.get(key, {})
            return dc_cls(**values)

        return cls(
            storage=build(StorageConfig, "storage"),
            ttl=build(TTLConfig, "ttl"),
            auth=build(AuthConfig, "auth"),
            server=build(ServerConfig, "server"),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ

        api_key = env.get("API_KEY") or None
        auth_disabled = _env_flag(env.get("DISABLE_AUTH_CHECK"), False)

        port_raw = env.get("PORT", "")
        try:
            port = int(port_raw) if port_raw.strip() else ServerConfig.port
        except ValueError:
            port = ServerConfig.port

        return cls(
            storage=StorageConfig(
                type=env.get("STORAGE_TYPE", StorageConfig.type).strip().lower(),
                url=env.get("REDIS_URL", StorageConfig.url),
                prefix=env.get("KEY_PREFIX", StorageConfig.prefix),
                native_expiry=_env_flag(env.get("REDIS_NATIVE_EXPIRY"), True),
            ),
            ttl=TTLConfig.from_env(env),
            auth=AuthConfig(enabled=api_key is not None and not auth_disabled, api_key=api_key),
            server=ServerConfig(
                host=env.get("HOST", ServerConfig.host),
                port=port,
                log_level=env.get("LOG_LEVEL", ServerConfig.log_level).upper(),
            ),
        )
