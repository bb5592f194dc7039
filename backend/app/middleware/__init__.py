"""
Gebeta Backend: Middleware Package
==================================

Cross-cutting concerns applied to every request.

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → [GZip] → Router

    - Request ID first so every later log line can carry it
    - Logging sees the final status, including CORS rejections
    - CORS rejects disallowed origins and answers preflights before the
      router runs; error envelopes raised by handlers still get CORS headers
      because the exception handlers sit inside this chain
"""
