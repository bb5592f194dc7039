"""
Gebeta Backend: Path and Query Parameter Helpers
================================================

What:  Typed access to the raw strings the router binds and the query string
       carries.
Why:   The router hands handlers plain strings; identifiers must be rejected
       with 400 before any query runs, and list limits fall back to their
       defaults instead of failing.
"""

import uuid
from typing import Optional

from starlette.requests import Request

from app.exceptions import InvalidInputError


def path_uuid(request: Request, name: str) -> uuid.UUID:
    """
    Parse a path parameter as a UUID.

    Raises:
        InvalidInputError: the value is not a UUID
    """
    raw = request.path_params.get(name, "")
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise InvalidInputError(
            message=f"Invalid {name} '{raw}': expected a UUID",
            field=name,
        ) from None


def query_limit(request: Request, default: int) -> int:
    """?limit=N when N is a positive integer, otherwise `default`."""
    raw = request.query_params.get("limit")
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def query_flag(request: Request, name: str) -> Optional[bool]:
    """
    Tri-state boolean filter.

    absent or empty  → None (no filter)
    "true"           → True
    anything else    → False
    """
    raw = request.query_params.get(name)
    if not raw:
        return None
    return raw == "true"


def query_text(request: Request, name: str) -> Optional[str]:
    raw = request.query_params.get(name)
    return raw or None
