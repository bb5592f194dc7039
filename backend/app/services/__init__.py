"""
Gebeta Backend: Services Layer
==============================

Business rules between the route handlers and the database. Every service
is a stateless module-level singleton that takes the request's session.

Service Inventory:
    - BusinessService:     catalogue CRUD, slug generation (create_slug)
    - MenuService:         menus, top items, item detail
    - ReviewService:       reviews and the business rating aggregate
    - ApplicationService:  registration and approval workflow
    - AssistantService:    abstract food assistant; GeminiAssistant implements it
"""
