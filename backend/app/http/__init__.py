"""
Gebeta Backend: HTTP Core
=========================

The request-handling layer every endpoint goes through:

    router.py    Router: (method, path) → handler, path parameter binding
    body.py      parse_body(): drain the request stream, decode JSON once
    response.py  ResponseWriter and the {success, data, message, error} envelope
"""

from app.http.body import parse_body
from app.http.response import ResponseWriter, error_envelope, success_envelope
from app.http.router import Route, Router

__all__ = [
    "Route",
    "Router",
    "ResponseWriter",
    "parse_body",
    "success_envelope",
    "error_envelope",
]
