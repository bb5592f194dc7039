"""
Gebeta Backend: Menu Route Handlers
===================================

Routes:
    GET    /api/menu/item/:id             one item with its business summary
    GET    /api/menu/:businessId          menu, ?category= and ?available= filters
    GET    /api/menu/:businessId/top      top-rated items, ?limit= (default 5)
    POST   /api/menu                      create item
    PUT    /api/menu/:id                  partial update
    DELETE /api/menu/:id                  delete

/api/menu/item/:id is registered before /api/menu/:businessId/top; both have
three segments and the first registered match wins.
"""

from starlette.requests import Request

from app.config import settings
from app.database import session_scope
from app.http import ResponseWriter, Router, parse_body, success_envelope
from app.routes.params import path_uuid, query_flag, query_limit, query_text
from app.schemas.common import documents, validate_payload
from app.schemas.menu import MenuItemCreate, MenuItemUpdate
from app.services.menu_service import menu_service


async def get_menu(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "businessId")
    async with session_scope() as db:
        items = await menu_service.list_for_business(
            db,
            business_id,
            category=query_text(request, "category"),
            available=query_flag(request, "available"),
        )
    await response.json(200, success_envelope(data=documents(items)))


async def get_top_items(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "businessId")
    limit = query_limit(request, settings.default_top_items)
    async with session_scope() as db:
        items = await menu_service.top_items(db, business_id, limit)
    await response.json(200, success_envelope(data=documents(items)))


async def get_menu_item(request: Request, response: ResponseWriter) -> None:
    item_id = path_uuid(request, "id")
    async with session_scope() as db:
        item = await menu_service.get_item(db, item_id)
    await response.json(200, success_envelope(data=item.to_document()))


async def create_menu_item(request: Request, response: ResponseWriter) -> None:
    data = validate_payload(MenuItemCreate, await parse_body(request))
    async with session_scope() as db:
        item = await menu_service.create_item(db, data)
    await response.json(
        201,
        success_envelope(data=item.to_document(), message="Menu item created successfully"),
    )


async def update_menu_item(request: Request, response: ResponseWriter) -> None:
    item_id = path_uuid(request, "id")
    data = validate_payload(MenuItemUpdate, await parse_body(request))
    async with session_scope() as db:
        item = await menu_service.update_item(db, item_id, data)
    await response.json(
        200,
        success_envelope(data=item.to_document(), message="Menu item updated successfully"),
    )


async def delete_menu_item(request: Request, response: ResponseWriter) -> None:
    item_id = path_uuid(request, "id")
    async with session_scope() as db:
        await menu_service.delete_item(db, item_id)
    await response.json(200, success_envelope(message="Menu item deleted successfully"))


def register_menu_routes(router: Router) -> None:
    router.get("/api/menu/item/:id", get_menu_item)
    router.get("/api/menu/:businessId", get_menu)
    router.get("/api/menu/:businessId/top", get_top_items)
    router.post("/api/menu", create_menu_item)
    router.put("/api/menu/:id", update_menu_item)
    router.delete("/api/menu/:id", delete_menu_item)
