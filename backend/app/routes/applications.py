"""
Gebeta Backend: Business Application Route Handlers
===================================================

Routes:
    GET   /api/applications          list, ?status=pending|approved|rejected|all
    GET   /api/applications/:id      one application
    POST  /api/applications          submit (always starts as 'pending')
    PATCH /api/applications/:id      admin decision and/or note
"""

import logging

from starlette.requests import Request

from app.database import session_scope
from app.http import ResponseWriter, Router, parse_body, success_envelope
from app.routes.params import path_uuid, query_text
from app.schemas.application import ApplicationCreate, ApplicationUpdate
from app.schemas.common import documents, validate_payload
from app.services.application_service import application_service

logger = logging.getLogger(__name__)


async def list_applications(request: Request, response: ResponseWriter) -> None:
    status = query_text(request, "status")
    async with session_scope() as db:
        applications = await application_service.list_applications(db, status)
    await response.json(200, success_envelope(data=documents(applications)))


async def get_application(request: Request, response: ResponseWriter) -> None:
    application_id = path_uuid(request, "id")
    async with session_scope() as db:
        application = await application_service.get_application(db, application_id)
    await response.json(200, success_envelope(data=application.to_document()))


async def submit_application(request: Request, response: ResponseWriter) -> None:
    data = validate_payload(ApplicationCreate, await parse_body(request))
    async with session_scope() as db:
        application = await application_service.submit(db, data)
    await response.json(
        201,
        success_envelope(
            data=application.to_document(),
            message="Application submitted. We will review it shortly.",
        ),
    )


async def update_application(request: Request, response: ResponseWriter) -> None:
    application_id = path_uuid(request, "id")
    data = validate_payload(ApplicationUpdate, await parse_body(request))
    async with session_scope() as db:
        application = await application_service.update(db, application_id, data)
    logger.info("Application %s is now %s", application.id, application.status)
    await response.json(
        200,
        success_envelope(data=application.to_document(), message="Application updated successfully"),
    )


def register_application_routes(router: Router) -> None:
    router.get("/api/applications", list_applications)
    router.get("/api/applications/:id", get_application)
    router.post("/api/applications", submit_application)
    router.patch("/api/applications/:id", update_application)
