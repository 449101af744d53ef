"""JSON codec for responses and errors.

Wire contract:
- Success: ``{"success": true, "data": ..., "statusCode": 200}``
- Failure: ``{"success": false, "error": {...}, "statusCode": 404}``
- Keys are camelCase; ``None`` values are omitted (sparse encoding).
- Error timestamps are ``dd-MM-yyyy HH:mm:ss`` strings.
- Sub-errors carry a ``type`` tag (``validation`` / ``business`` /
  ``authentication``) that selects the variant on decode.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from api_response.config.settings import Settings, get_settings
from api_response.domain.api_error import ApiError
from api_response.exceptions import CodecError
from api_response.response import Response

logger = logging.getLogger(__name__)

Raw = str | bytes | bytearray | Mapping[str, Any]


def encode(response: Response[Any], *, settings: Settings | None = None) -> dict[str, Any]:
    """Encode *response* into its JSON-compatible dict form."""
    settings = settings or get_settings()
    payload = response.model_dump(mode="json", by_alias=True, exclude_none=True)
    error = payload.get("error")
    if error is not None and not settings.include_debug_message:
        error.pop("debugMessage", None)
    return payload


def encode_error(error: ApiError, *, settings: Settings | None = None) -> dict[str, Any]:
    """Encode a standalone :class:`ApiError`."""
    settings = settings or get_settings()
    payload = error.model_dump(mode="json", by_alias=True, exclude_none=True)
    if not settings.include_debug_message:
        payload.pop("debugMessage", None)
    return payload


def to_json(
    response: Response[Any],
    *,
    indent: int | None = None,
    settings: Settings | None = None,
) -> str:
    """Encode *response* as a JSON string."""
    return json.dumps(encode(response, settings=settings), indent=indent, ensure_ascii=False)


def _validate[M: BaseModel](model_cls: type[M], raw: Raw) -> M:
    try:
        if isinstance(raw, str | bytes | bytearray):
            return model_cls.model_validate_json(raw)
        return model_cls.model_validate(dict(raw))
    except ValidationError as exc:
        logger.debug("Decoding %s failed: %s", model_cls.__name__, exc)
        msg = f"Payload does not match the {model_cls.__name__} contract ({exc.error_count()} error(s))"
        raise CodecError(msg) from exc


def decode(raw: Raw, data_type: Any = Any) -> Response[Any]:
    """Decode a response from JSON text or an already-parsed mapping.

    Args:
        raw: JSON string/bytes, or a mapping in the wire shape.
        data_type: Type the success payload is validated against.

    Raises:
        CodecError: If *raw* is not valid JSON or breaks the contract.
    """
    return _validate(Response[data_type], raw)


def decode_error(raw: Raw) -> ApiError:
    """Decode a standalone :class:`ApiError`."""
    return _validate(ApiError, raw)
