"""
Gebeta Backend: CORS Middleware
===============================

What:  Origin allowlist enforcement and CORS response headers.
How:   A Starlette BaseHTTPMiddleware evaluated before the router.

Decision table:
    no Origin header            → pass through, headers with Allow-Origin "*"
    Origin not on allowlist     → 403 failure envelope, router never runs
    OPTIONS (preflight)         → 204, empty body, CORS headers
    anything else               → router response + CORS headers

Allow-Origin echoes the caller's origin when it is allowed explicitly, or "*"
in allow-all mode. Allow-Credentials is only sent with an echoed origin;
browsers reject credentials combined with "*".

Unexpected errors are rendered by Starlette outside this middleware, so the
500 handler in main.py applies the same CORSPolicy itself.
"""

import logging
from typing import Dict, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.exceptions import ForbiddenError
from app.http.response import error_response
from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"
WILDCARD = "*"


class CORSPolicy:
    """Origin allowlist and the headers it produces for one request."""

    def __init__(self, allow_origins: Iterable[str] = ()):
        origins = [origin.strip() for origin in allow_origins if origin.strip()]
        self.allow_all = WILDCARD in origins
        self.allow_origins = frozenset(o for o in origins if o != WILDCARD)

    def is_allowed(self, origin: str) -> bool:
        return self.allow_all or origin in self.allow_origins

    def headers(self, origin: Optional[str]) -> Dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
            "Vary": "Origin",
        }
        if origin and origin in self.allow_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Access-Control-Allow-Credentials"] = "true"
        else:
            headers["Access-Control-Allow-Origin"] = WILDCARD
        return headers


class CORSMiddleware(BaseHTTPMiddleware):

    def __init__(self, app: ASGIApp, allow_origins: Iterable[str] = ()):
        super().__init__(app)
        self.policy = CORSPolicy(allow_origins)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")

        if origin is not None and not self.policy.is_allowed(origin):
            logger.warning(
                "[%s] Rejected origin %s for %s %s",
                request_id_var.get(""),
                origin,
                request.method,
                request.url.path,
            )
            return error_response(ForbiddenError(context={"origin": origin}))

        headers = self.policy.headers(origin)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        for name, value in headers.items():
            response.headers[name] = value
        return response
