from __future__ import annotations

import contextlib
import logging
import typing as t

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from ..core.errors import KVStoreError, NotFoundError
from ..storage.base import Repository
from ..storage.factory import RepositoryFactory
from ..utils.config import AppConfig
from .auth import ApiKeyMiddleware
from .handlers import ItemHandlers, text_response

_logger = logging.getLogger(__name__)


async def _handle_kv_error(request: Request, exc: KVStoreError) -> PlainTextResponse:
    operation = getattr(request.state, "operation", "unknown")
    # handlers already log not-found with the lookup details
    level = logging.DEBUG if isinstance(exc, NotFoundError) else logging.WARNING
    _logger.log(
        level,
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return text_response(operation, exc.message, exc.status_code)


def create_app(
    config: t.Optional[AppConfig] = None,
    repository: t.Optional[Repository] = None,
) -> Starlette:
    """Build the ASGI application.

    `repository` replaces the configured backend, which is how tests run the
    app against an `InMemoryRepository`.
    """
    config = config or AppConfig.from_env()
    repositories = RepositoryFactory(config.storage)
    if repository is not None:
        repositories.override(repository)
    handlers = ItemHandlers(repositories, config.ttl)

    middleware: t.List[Middleware] = []
    if config.auth.enabled:
        if not config.auth.api_key:
            raise ValueError("auth is enabled but no API key is configured")
        middleware.append(Middleware(ApiKeyMiddleware, api_key=config.auth.api_key, header_name=config.auth.header_name))

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> t.AsyncIterator[None]:
        try:
            yield
        finally:
            await repositories.close()

    app = Starlette(
        routes=[
            Route("/item/{key:path}", handlers.get_item, methods=["GET"]),
            Route("/item/{key:path}", handlers.put_item, methods=["PUT"]),
            Route("/item/{key:path}", handlers.delete_item, methods=["DELETE"]),
            Route("/extractCode/{key:path}", handlers.extract_and_store_code, methods=["POST"]),
            Route("/health", handlers.health, methods=["GET"]),
        ],
        middleware=middleware,
        exception_handlers={KVStoreError: _handle_kv_error},
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.repositories = repositories
    return app
