"""
Gebeta Backend: API Routes Package
==================================

What:  Route handlers for every /api endpoint, registered on one Router.
How:   Each module exposes `register_*_routes(router)`; build_router() calls
       them in a fixed order, since the first matching route wins.

Route Inventory:
    - health.py:        GET /api/health
    - businesses.py:    /api/businesses...
    - menu.py:          /api/menu...
    - reviews.py:       /api/reviews...
    - applications.py:  /api/applications...
    - chat.py:          POST /api/chat

Handlers stay thin: read params and body, call a service, write the envelope.
"""

from app.http import Router
from app.routes.applications import register_application_routes
from app.routes.businesses import register_business_routes
from app.routes.chat import register_chat_routes
from app.routes.health import register_health_routes
from app.routes.menu import register_menu_routes
from app.routes.reviews import register_review_routes


def build_router() -> Router:
    router = Router()
    register_health_routes(router)
    register_business_routes(router)
    register_menu_routes(router)
    register_review_routes(router)
    register_application_routes(router)
    register_chat_routes(router)
    return router
