"""
Gebeta Backend: Response Writer and Envelope
============================================

What:  The response capability handed to every route handler, plus the
       helpers that build the uniform JSON envelope.
How:   ResponseWriter wraps the ASGI `send` callable and exposes the four
       operations a handler needs: set_status, set_header, write, end.
       Headers go out with the first body chunk; after that they are frozen.

Envelope:
    success:  {"success": true,  "data": ..., "message": ..., "timestamp": ...}
    failure:  {"success": false, "error": "<code>", "message": ..., "timestamp": ...}
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from starlette.responses import JSONResponse
from starlette.types import Send

from app.exceptions import GebetaError

_MISSING = object()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def success_envelope(data: Any = _MISSING, message: Optional[str] = None) -> Dict[str, Any]:
    envelope: Dict[str, Any] = {"success": True}
    if data is not _MISSING:
        envelope["data"] = data
    if message is not None:
        envelope["message"] = message
    envelope["timestamp"] = _timestamp()
    return envelope


def error_envelope(error_code: str, message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "error": error_code,
        "message": message,
        "timestamp": _timestamp(),
    }


def error_response(exc: GebetaError, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    """Render an application exception as its status code and failure envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.error_code, exc.message),
        headers=headers,
    )


def render_json(payload: Any) -> bytes:
    # Same encoding rules as starlette.responses.JSONResponse
    return json.dumps(
        payload,
        ensure_ascii=False,
        allow_nan=False,
        indent=None,
        separators=(",", ":"),
    ).encode("utf-8")


class ResponseWriter:
    """
    Writable HTTP response for one request.

    Contract:
        - set_status / set_header only before the response has started
        - write() may be called any number of times; the first call sends
          the status line and headers
        - end() must be called exactly once; it flushes headers if nothing
          was written yet and closes the body
        - json() is set_status + content type + end in one call

    Any call that would write a second terminal response raises
    RuntimeError.
    """

    def __init__(self, send: Send):
        self._send = send
        self._headers: Dict[str, str] = {}
        self.status_code = 200
        self.started = False
        self.finished = False

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def set_status(self, status_code: int) -> None:
        self._ensure_not_started("status")
        self.status_code = status_code

    def set_header(self, name: str, value: str) -> None:
        self._ensure_not_started("headers")
        self._headers[name.lower()] = value

    async def write(self, chunk: Union[bytes, str]) -> None:
        if self.finished:
            raise RuntimeError("Response already ended")
        body = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        await self._start()
        await self._send({"type": "http.response.body", "body": body, "more_body": True})

    async def end(self, chunk: Union[bytes, str] = b"") -> None:
        if self.finished:
            raise RuntimeError("Response already ended")
        body = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        if not self.started and self.status_code not in (204, 304):
            self._headers.setdefault("content-length", str(len(body)))
        await self._start()
        self.finished = True
        await self._send({"type": "http.response.body", "body": body, "more_body": False})

    async def json(self, status_code: int, payload: Any) -> None:
        self.set_status(status_code)
        self.set_header("Content-Type", "application/json")
        await self.end(render_json(payload))

    async def _start(self) -> None:
        if self.started:
            return
        self.started = True
        raw_headers: List[Tuple[bytes, bytes]] = [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in self._headers.items()
        ]
        await self._send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": raw_headers,
            }
        )

    def _ensure_not_started(self, what: str) -> None:
        if self.started:
            raise RuntimeError(f"Cannot change {what} after the response has started")
