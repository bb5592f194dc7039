"""
Gebeta Backend: Business Route Handlers
=======================================

What:  /api/businesses endpoints.
How:   Thin handlers: read params/body, call BusinessService inside a session
       scope, write the success envelope. Failures raise and are rendered by
       the host's exception handlers.

Routes:
    GET    /api/businesses                       list all
    GET    /api/businesses/featured              featured only
    GET    /api/businesses/category/:category    filter by category
    GET    /api/businesses/detail/:id            one business
    POST   /api/businesses                       create
    PUT    /api/businesses/:id                   partial update
    DELETE /api/businesses/:id                   delete with menu and reviews
"""

from starlette.requests import Request

from app.database import session_scope
from app.http import ResponseWriter, Router, parse_body, success_envelope
from app.routes.params import path_uuid
from app.schemas.business import BusinessCreate, BusinessUpdate
from app.schemas.common import documents, validate_payload
from app.services.business_service import business_service


async def list_businesses(request: Request, response: ResponseWriter) -> None:
    async with session_scope() as db:
        businesses = await business_service.list_businesses(db)
    await response.json(200, success_envelope(data=documents(businesses)))


async def list_featured(request: Request, response: ResponseWriter) -> None:
    async with session_scope() as db:
        businesses = await business_service.list_featured(db)
    await response.json(200, success_envelope(data=documents(businesses)))


async def list_by_category(request: Request, response: ResponseWriter) -> None:
    category = request.path_params["category"]
    async with session_scope() as db:
        businesses = await business_service.list_by_category(db, category)
    await response.json(200, success_envelope(data=documents(businesses)))


async def get_business(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "id")
    async with session_scope() as db:
        business = await business_service.get_business(db, business_id)
    await response.json(200, success_envelope(data=business.to_document()))


async def create_business(request: Request, response: ResponseWriter) -> None:
    data = validate_payload(BusinessCreate, await parse_body(request))
    async with session_scope() as db:
        business = await business_service.create_business(db, data)
    await response.json(
        201,
        success_envelope(data=business.to_document(), message="Business created successfully"),
    )


async def update_business(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "id")
    data = validate_payload(BusinessUpdate, await parse_body(request))
    async with session_scope() as db:
        business = await business_service.update_business(db, business_id, data)
    await response.json(
        200,
        success_envelope(data=business.to_document(), message="Business updated successfully"),
    )


async def delete_business(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "id")
    async with session_scope() as db:
        await business_service.delete_business(db, business_id)
    await response.json(200, success_envelope(message="Business deleted successfully"))


def register_business_routes(router: Router) -> None:
    router.get("/api/businesses", list_businesses)
    router.get("/api/businesses/featured", list_featured)
    router.get("/api/businesses/category/:category", list_by_category)
    router.get("/api/businesses/detail/:id", get_business)
    router.post("/api/businesses", create_business)
    router.put("/api/businesses/:id", update_business)
    router.delete("/api/businesses/:id", delete_business)
