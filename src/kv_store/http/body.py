"""Normalize JSON, form-encoded and plain-text request bodies into one string."""

from __future__ import annotations

import json
from urllib.parse import parse_qs, unquote_plus

from ..core.errors import MalformedInput, ValidationError

EMPTY_BODY_MESSAGE = "Request body cannot be empty"
MISSING_TEXT_MESSAGE = 'The "text" field is required in the request body'
INVALID_JSON_MESSAGE = "Invalid JSON format in request body"


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def normalize_text(body: bytes, content_type: str = "") -> str:
    if not body:
        raise ValidationError(EMPTY_BODY_MESSAGE)
    raw = body.decode("utf-8", errors="replace")
    media_type = _media_type(content_type or "")

    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            raise MalformedInput(INVALID_JSON_MESSAGE) from None
        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str) or not text:
            raise ValidationError(MISSING_TEXT_MESSAGE)
        return text

    if media_type == "application/x-www-form-urlencoded":
        fields = parse_qs(raw, keep_blank_values=True)
        if "text" in fields:
            text = fields["text"][0]
        else:
            # bare encoded text, not key=value pairs
            text = unquote_plus(raw)
        if not text:
            raise ValidationError(EMPTY_BODY_MESSAGE)
        return text

    return raw
