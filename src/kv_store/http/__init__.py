"""HTTP surface: Starlette app, request handlers, body normalization and API key guard."""

from .app import create_app
from .auth import ApiKeyMiddleware
from .body import normalize_text
from .handlers import ItemHandlers

__all__ = ["create_app", "ApiKeyMiddleware", "ItemHandlers", "normalize_text"]
