from __future__ import annotations

import dataclasses
import logging

import click
import uvicorn

from .http.app import create_app
from .utils.config import AppConfig
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)

_DEFAULTS = AppConfig.from_env()


@click.command()
@click.option("--host", default=_DEFAULTS.server.host, show_default=True, help="Interface to bind")
@click.option("--port", default=_DEFAULTS.server.port, show_default=True, help="Port to listen on for HTTP")
@click.option(
    "--log-level",
    default=_DEFAULTS.server.log_level,
    show_default=True,
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.option(
    "--storage",
    type=click.Choice(["memory", "redis"], case_sensitive=False),
    default=_DEFAULTS.storage.type,
    show_default=True,
    help="Storage backend",
)
@click.option("--redis-url", default=_DEFAULTS.storage.url, show_default=True, help="Redis URL for RedisRepository")
@click.option("--redis-prefix", default=_DEFAULTS.storage.prefix, show_default=True, help="Redis key prefix")
def main(host: str, port: int, log_level: str, storage: str, redis_url: str, redis_prefix: str) -> None:
    """Serve the key-value store over HTTP."""
    configure_logging(log_level)

    config = dataclasses.replace(
        _DEFAULTS,
        storage=dataclasses.replace(_DEFAULTS.storage, type=storage.lower(), url=redis_url, prefix=redis_prefix),
        server=dataclasses.replace(_DEFAULTS.server, host=host, port=port, log_level=log_level.upper()),
    )
    if config.auth.enabled:
        logger.info("API key authentication enabled")
    else:
        logger.warning("API key authentication disabled; expecting an upstream gateway to authorize requests")

    app = create_app(config)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
