"""
Gebeta Backend: Request Body Parser
===================================

What:  Reads a request body to completion and decodes it as JSON.

Outcomes:
    empty body          → {}  (not an error)
    valid JSON          → the parsed value (object, array or primitive)
    malformed content   → InvalidPayloadError (400)
    client disconnect   → starlette.requests.ClientDisconnect, unchanged

Python's json module also accepts NaN, Infinity and -Infinity, and turns
out-of-range numbers such as 1e999 into inf. None of these are JSON and none
can be written back out, so they are rejected as malformed.

The stream can be drained only once per request; a second call raises
starlette's "Stream consumed" RuntimeError.
"""

import json
import logging
import math
from typing import Any, List

from starlette.requests import Request

from app.exceptions import InvalidPayloadError

logger = logging.getLogger(__name__)


def _reject_constant(literal: str) -> Any:
    raise ValueError(f"{literal} is not a valid JSON value")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number {literal} is out of range")
    return value


def decode_json(raw: bytes) -> Any:
    """Strict JSON decode: UTF-8 only, finite numbers only."""
    return json.loads(
        raw.decode("utf-8"),
        parse_constant=_reject_constant,
        parse_float=_finite_float,
    )


async def parse_body(request: Request) -> Any:
    chunks: List[bytes] = []
    async for chunk in request.stream():
        chunks.append(chunk)
    raw = b"".join(chunks)

    if not raw:
        return {}

    try:
        return decode_json(raw)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.debug("Rejecting %d byte body on %s: %s", len(raw), request.url.path, exc)
        raise InvalidPayloadError(context={"reason": str(exc)}) from exc
