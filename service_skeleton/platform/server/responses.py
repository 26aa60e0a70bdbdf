"""
JSON response helpers.
"""

import json
from typing import Any

import attr
import structlog
from starlette.responses import Response

__all__ = ["JSON_MEDIA_TYPE", "dumps", "respond"]

JSON_MEDIA_TYPE = "application/json; charset=utf-8"


def serialize(obj):
    """Encode attrs response bodies as their field mapping."""
    if attr.has(type(obj)):
        return attr.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(obj) -> str:
    """Compact JSON, keeping non-ASCII text as is."""
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), default=serialize)


def respond(logger: structlog.stdlib.BoundLogger, status_code: int, data: Any) -> Response:
    """Build a JSON response with the given status code.

    The status code is kept even when ``data`` cannot be encoded; the encoding
    failure is logged and the body is left empty.

    Args:
        logger: Logger for reporting encoding failures
        status_code: HTTP status code of the response
        data: A JSON-serializable value or attrs instance

    Returns:
        The response to send
    """
    try:
        body = dumps(data) + "\n"
    except (TypeError, ValueError) as exc:
        logger.error("failed to write response", error=str(exc), status=status_code)
        body = ""
    return Response(content=body, status_code=status_code, media_type=JSON_MEDIA_TYPE)
