"""
Gebeta Backend: Path Router
===========================

What:  Maps (HTTP method, path) to a registered handler and dispatches the
       request to it.
How:   Patterns are split into segments at registration. A segment starting
       with ':' is a parameter that binds exactly one non-empty path
       component; every other segment must match literally.

    Pattern:  /api/menu/:businessId/top
    Path:     /api/menu/3f2a.../top
    Match:    request.path_params == {"businessId": "3f2a..."}

Rules:
    - segment counts must be equal
    - routes are tried in registration order; the first match wins
    - registering the same (method, pattern) twice replaces the handler and
      keeps the original position
    - no match → 404 failure envelope, never an exception
    - handler exceptions are not caught here; the host application's
      exception handlers turn them into responses

The router is an ASGI application, so it can be mounted into the FastAPI host
or driven directly by a test transport.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union

from starlette.requests import Request
from starlette.types import Receive, Scope, Send

from app.http.response import ResponseWriter, error_envelope

logger = logging.getLogger(__name__)

Handler = Callable[[Request, ResponseWriter], Union[Awaitable[None], None]]

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
PARAM_MARKER = ":"


def split_path(path: str) -> List[str]:
    """'/api/menu/42/' → ['api', 'menu', '42']; '/' → []."""
    stripped = path.strip("/")
    return stripped.split("/") if stripped else []


@dataclass(frozen=True)
class Segment:
    value: str
    is_param: bool

    @classmethod
    def parse(cls, raw: str) -> "Segment":
        if raw.startswith(PARAM_MARKER):
            name = raw[len(PARAM_MARKER):]
            if not name:
                raise ValueError("Route parameter needs a name after ':'")
            return cls(name, True)
        return cls(raw, False)


@dataclass(frozen=True)
class Route:
    method: str
    pattern: str
    segments: Tuple[Segment, ...]
    handler: Handler

    def match(self, parts: List[str]) -> Optional[Dict[str, str]]:
        """Return bound parameters when `parts` fits this pattern, else None."""
        if len(parts) != len(self.segments):
            return None
        params: Dict[str, str] = {}
        for segment, part in zip(self.segments, parts):
            if segment.is_param:
                if not part:
                    return None
                params[segment.value] = part
            elif segment.value != part:
                return None
        return params


class Router:
    """
    Method + path dispatcher.

    Usage:
        router = Router()
        router.get("/api/businesses/detail/:id", get_by_id)

        @router.post("/api/businesses")
        async def create(request, response):
            ...
    """

    def __init__(self) -> None:
        self._routes: List[Route] = []

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def register(self, method: str, pattern: str, handler: Handler) -> Handler:
        normalized = method.upper().strip()
        if normalized not in SUPPORTED_METHODS:
            raise ValueError(
                f"Unsupported method '{method}'. Must be one of: {', '.join(SUPPORTED_METHODS)}"
            )
        if not pattern.startswith("/"):
            raise ValueError("Route pattern must start with '/'")

        segments = tuple(Segment.parse(raw) for raw in split_path(pattern))
        route = Route(normalized, pattern, segments, handler)

        for index, existing in enumerate(self._routes):
            if existing.method == normalized and existing.pattern == pattern:
                logger.debug("Replacing handler for %s %s", normalized, pattern)
                self._routes[index] = route
                break
        else:
            self._routes.append(route)
        return handler

    def get(self, pattern: str, handler: Optional[Handler] = None):
        return self._shorthand("GET", pattern, handler)

    def post(self, pattern: str, handler: Optional[Handler] = None):
        return self._shorthand("POST", pattern, handler)

    def put(self, pattern: str, handler: Optional[Handler] = None):
        return self._shorthand("PUT", pattern, handler)

    def patch(self, pattern: str, handler: Optional[Handler] = None):
        return self._shorthand("PATCH", pattern, handler)

    def delete(self, pattern: str, handler: Optional[Handler] = None):
        return self._shorthand("DELETE", pattern, handler)

    def _shorthand(self, method: str, pattern: str, handler: Optional[Handler]):
        if handler is not None:
            return self.register(method, pattern, handler)

        def decorator(func: Handler) -> Handler:
            return self.register(method, pattern, func)

        return decorator

    def resolve(self, method: str, path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        parts = split_path(path)
        normalized = method.upper()
        for route in self._routes:
            if route.method != normalized:
                continue
            params = route.match(parts)
            if params is not None:
                return route, params
        return None

    async def handle_routes(self, request: Request, response: ResponseWriter) -> None:
        path = request.url.path
        resolved = self.resolve(request.method, path)

        if resolved is None:
            logger.debug("No route for %s %s", request.method, path)
            await response.json(
                404,
                error_envelope("not_found", f"Route {request.method} {path} not found"),
            )
            return

        route, params = resolved
        # Request.path_params reads straight from the scope
        request.scope["path_params"] = params

        result = route.handler(request, response)
        if inspect.isawaitable(result):
            await result

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            if scope["type"] == "websocket":
                await send({"type": "websocket.close", "code": 1000})
            return
        await self.handle_routes(Request(scope, receive), ResponseWriter(send))
