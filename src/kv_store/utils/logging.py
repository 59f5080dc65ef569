from __future__ import annotations

import logging
import typing as t

from starlette.requests import Request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Headers safe to echo into logs; credentials are never included.
_LOGGED_HEADERS = (
    "content-type",
    "user-agent",
    "x-ttl-seconds",
    "x-ttl",
    "x-digits",
    "x-character-type",
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def request_info(request: Request) -> t.Dict[str, t.Any]:
    """Collect the non-sensitive parts of a request for log lines."""
    headers = {name: request.headers[name] for name in _LOGGED_HEADERS if name in request.headers}
    client = request.client
    return {
        "method": request.method,
        "path": request.url.path,
        "path_params": dict(request.path_params),
        "query": dict(request.query_params),
        "headers": headers,
        "source_ip": client.host if client else None,
    }
