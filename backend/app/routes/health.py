"""
Gebeta Backend: Health Check Route
==================================

What:  GET /api/health liveness endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the database, asks the chat assistant whether its
       model is reachable, and reports both next to the version and uptime.

The endpoint always answers 200 while the process is serving requests; a
failed database probe is reported as `database: "disconnected"` rather than
as an error status, so the frontend can tell "API down" from "DB down".
"""

import logging
import time

from sqlalchemy import text
from starlette.requests import Request

from app import __version__
from app.database import engine
from app.http import ResponseWriter, Router, success_envelope
from app.schemas.common import HealthResponse
from app.services.assistant_service import assistant_service

logger = logging.getLogger(__name__)

# Set once when the module loads
_start_time = time.time()


async def assistant_status() -> str:
    if not assistant_service.enabled:
        return "disabled"
    return "available" if await assistant_service.health_check() else "unavailable"


async def health_check(request: Request, response: ResponseWriter) -> None:
    db_status = "connected"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    health = HealthResponse(
        status="Gebeta API is online",
        version=__version__,
        database=db_status,
        assistant=await assistant_status(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    # Monitors read `status` at the top level; the full report sits under data
    payload = {"status": health.status, **success_envelope(data=health.to_document())}
    await response.json(200, payload)


def register_health_routes(router: Router) -> None:
    router.get("/api/health", health_check)
