from __future__ import annotations

import logging
import secrets
import typing as t

from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

_logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Missing API key. Please provide a valid x-api-key header."
INVALID_KEY_MESSAGE = "Invalid API key. Please provide a valid x-api-key header."


class ApiKeyMiddleware:
    """ASGI middleware requiring an API key header on every HTTP request.

    Used when no gateway authorizer sits in front of the service. A missing
    header is answered with 401, a blank or wrong key with 403. Paths in
    `exempt_paths` pass through untouched.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_key: str,
        header_name: str = "x-api-key",
        exempt_paths: t.Iterable[str] = ("/health",),
    ) -> None:
        self._app = app
        self._api_key = api_key
        self._header_name = header_name.lower()
        self._exempt = frozenset(exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http" or scope.get("path") in self._exempt:
            await self._app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        provided = headers.get(self._header_name)
        if provided is None:
            _logger.warning(
                "Authentication failed: Missing API Key method=%s path=%s headers=%s",
                scope.get("method"),
                scope.get("path"),
                sorted(headers.keys()),
            )
            await PlainTextResponse(MISSING_KEY_MESSAGE, status_code=401)(scope, receive, send)
            return

        if not provided.strip() or not secrets.compare_digest(provided.encode(), self._api_key.encode()):
            _logger.warning(
                "Authentication failed: Invalid API Key method=%s path=%s",
                scope.get("method"),
                scope.get("path"),
            )
            await PlainTextResponse(INVALID_KEY_MESSAGE, status_code=403)(scope, receive, send)
            return

        _logger.debug("API key accepted path=%s", scope.get("path"))
        await self._app(scope, receive, send)
