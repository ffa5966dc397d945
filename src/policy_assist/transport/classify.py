"""Classification of response bodies and error messages."""

import json
import logging
from typing import Any

from policy_assist.constants import (
    ERROR_BODY_LIMIT,
    ERROR_MESSAGE_KEYS,
    JSON_CONTENT_TYPES,
)
from policy_assist.core.types import RawResponse

log = logging.getLogger(__name__)


def is_json_content_type(content_type: str | None) -> bool:
    """Return True if the declared content type is JSON."""
    lowered = (content_type or "").split(";")[0].strip().lower()
    return any(marker in lowered for marker in JSON_CONTENT_TYPES)


def classify_body(
    text: str, content_type: str | None = None, text_field: str = "text"
) -> RawResponse:
    """Turn a successful response body into a raw value.

    Blank bodies become ``None``. JSON bodies (declared, or starting with
    ``{`` or ``[``) are parsed. Anything else, including JSON that fails to
    parse or nests too deeply to decode, is wrapped as ``{text_field: text}``.
    """
    stripped = text.strip()
    if not stripped:
        return None
    if is_json_content_type(content_type) or stripped[0] in "{[":
        try:
            return json.loads(stripped)
        except (ValueError, RecursionError):
            log.debug("Body looked like JSON but failed to parse; treating as text")
    return {text_field: stripped}


def extract_error_message(text: str, limit: int = ERROR_BODY_LIMIT) -> str:
    """Best-effort human readable message from an error body.

    Checks ``detail``, ``error`` and ``message`` in that order. FastAPI
    validation lists are reduced to their ``msg`` entries. Falls back to the
    raw text truncated to ``limit`` characters.
    """
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        payload = None

    message = ""
    if isinstance(payload, dict):
        for key in ERROR_MESSAGE_KEYS:
            message = _stringify(payload.get(key))
            if message:
                break
    elif isinstance(payload, str):
        message = payload.strip()

    if not message:
        message = text.strip()
    return _truncate(message, limit)


def _stringify(value: Any) -> str:
    match value:
        case str():
            return value.strip()
        case list():
            parts = [_stringify(item) for item in value]
            return "; ".join(part for part in parts if part)
        case dict():
            for key in ("msg", *ERROR_MESSAGE_KEYS):
                nested = _stringify(value.get(key))
                if nested:
                    return nested
            return json.dumps(value, ensure_ascii=False)
        case None:
            return ""
        case _:
            return str(value)


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
