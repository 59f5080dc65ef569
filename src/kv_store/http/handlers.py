from __future__ import annotations

import logging
import math
import time
import typing as t

from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ..core.errors import MalformedInput, NotFoundError, ValidationError
from ..core.extractor import DEFAULT_DIGIT_COUNT, extract_code
from ..core.models import CharacterClass
from ..core.ttl import TTLConfig, calculate_expiration, is_expired, parse_duration_from_source, parse_positive_int
from ..monitoring.metrics import kv_requests_total, kv_storage_latency_seconds
from ..storage.base import Repository
from ..storage.factory import RepositoryFactory
from ..utils.logging import request_info
from .body import normalize_text

T = t.TypeVar("T")

_logger = logging.getLogger(__name__)


def text_response(operation: str, body: str, status_code: int = 200) -> PlainTextResponse:
    kv_requests_total.inc(operation=operation, status=status_code)
    return PlainTextResponse(body, status_code=status_code)


def _first_present(*values: t.Optional[str]) -> t.Optional[str]:
    for value in values:
        if value is not None and value.strip() != "":
            return value
    return None


class ItemHandlers:
    """Request handlers for the item and code-extraction routes.

    The repository comes from the injected factory, so tests swap the backend
    by overriding the factory before the first request.
    """

    def __init__(self, repositories: RepositoryFactory, ttl_config: t.Optional[TTLConfig] = None) -> None:
        self._repositories = repositories
        # None re-reads the environment on every request
        self._ttl_config = ttl_config

    @property
    def repository(self) -> Repository:
        return self._repositories.get()

    async def _timed(self, operation: str, fn: t.Callable[[], t.Awaitable[T]]) -> T:
        started = time.perf_counter()
        try:
            return await fn()
        finally:
            kv_storage_latency_seconds.observe(time.perf_counter() - started, operation=operation)

    @staticmethod
    def _require_key(request: Request, message: str) -> str:
        key = request.path_params.get("key") or ""
        if not key.strip():
            raise ValidationError(message)
        return key

    @staticmethod
    def _ttl_duration(request: Request) -> t.Optional[int]:
        header = _first_present(request.headers.get("x-ttl-seconds"), request.headers.get("x-ttl"))
        return parse_duration_from_source(header, request.query_params.get("ttl"))

    async def get_item(self, request: Request) -> PlainTextResponse:
        request.state.operation = "get"
        key = self._require_key(request, "Key is required")
        info = request_info(request)

        try:
            item = await self._timed("get", lambda: self.repository.get_item(key))
        except Exception:  # noqa: BLE001 - storage failures map to a generic 500
            _logger.exception("Error in get_item handler key=%s request=%s", key, info)
            return text_response("get", "Error retrieving item", 500)

        if item is None:
            _logger.warning("Item not found in repository key=%s request=%s", key, info)
            raise NotFoundError()

        if is_expired(item, self._ttl_config):
            _logger.warning(
                "Item found but expired key=%s ttl=%s now=%d request=%s",
                key,
                item.ttl,
                math.floor(time.time()),
                info,
            )
            raise NotFoundError()

        _logger.info("Item successfully retrieved key=%s value_length=%d", key, len(item.value))
        return text_response("get", item.value)

    async def put_item(self, request: Request) -> PlainTextResponse:
        request.state.operation = "put"
        key = self._require_key(request, "Key is required")
        body = await request.body()
        try:
            value = body.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedInput("Invalid request body") from None
        if not value:
            raise ValidationError("Value is required in the request body")

        ttl = calculate_expiration(self._ttl_duration(request), self._ttl_config)
        try:
            item = await self._timed("put", lambda: self.repository.put_item(key, value, ttl))
        except Exception:  # noqa: BLE001
            _logger.exception("Error in put_item handler key=%s request=%s", key, request_info(request))
            return text_response("put", "Error saving item", 500)

        _logger.info("Item successfully saved key=%s ttl=%s", item.key, item.ttl)
        return text_response("put", "Item successfully saved")

    async def delete_item(self, request: Request) -> PlainTextResponse:
        request.state.operation = "delete"
        key = self._require_key(request, "Key is required")

        try:
            await self._timed("delete", lambda: self.repository.delete_item(key))
        except Exception:  # noqa: BLE001
            _logger.exception("Error in delete_item handler key=%s request=%s", key, request_info(request))
            return text_response("delete", "Error deleting item", 500)

        _logger.info("Item successfully deleted key=%s", key)
        return text_response("delete", "Item successfully deleted")

    async def extract_and_store_code(self, request: Request) -> PlainTextResponse:
        request.state.operation = "extract"
        key = self._require_key(request, "Key must be specified in the path")

        digits = (
            parse_positive_int(request.headers.get("x-digits"))
            or parse_positive_int(request.query_params.get("digits"))
            or DEFAULT_DIGIT_COUNT
        )
        character_class = CharacterClass.parse(
            _first_present(request.headers.get("x-character-type"), request.query_params.get("characterType"))
        )
        text = normalize_text(await request.body(), request.headers.get("content-type", ""))

        code = extract_code(text, digits, character_class)
        if code is None:
            raise ValidationError(
                "No code matching the criteria found in the text "
                f"(digits: {digits}, characterType: {character_class.value})"
            )

        ttl = calculate_expiration(self._ttl_duration(request), self._ttl_config)
        try:
            await self._timed("extract", lambda: self.repository.put_item(key, code, ttl))
        except Exception:  # noqa: BLE001
            _logger.exception("Error in extract_and_store_code handler key=%s request=%s", key, request_info(request))
            return text_response("extract", "An error occurred while processing your request", 500)

        _logger.info("Code extracted and stored key=%s digits=%d characterType=%s", key, digits, character_class.value)
        return text_response("extract", f"Code extracted and stored successfully: {code}")

    async def health(self, request: Request) -> PlainTextResponse:
        request.state.operation = "health"
        if await self.repository.is_healthy():
            return text_response("health", "OK")
        return text_response("health", "Storage unavailable", 503)
