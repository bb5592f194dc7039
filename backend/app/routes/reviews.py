"""Review route handlers (/api/reviews)."""

from starlette.requests import Request

from app.config import settings
from app.database import session_scope
from app.http import ResponseWriter, Router, parse_body, success_envelope
from app.routes.params import path_uuid, query_limit
from app.schemas.common import documents, validate_payload
from app.schemas.review import ReviewCreate
from app.services.review_service import review_service


async def recent_reviews(request: Request, response: ResponseWriter) -> None:
    limit = query_limit(request, settings.default_recent_reviews)
    async with session_scope() as db:
        reviews = await review_service.recent(db, limit)
    await response.json(200, success_envelope(data=documents(reviews)))


async def business_reviews(request: Request, response: ResponseWriter) -> None:
    business_id = path_uuid(request, "businessId")
    limit = query_limit(request, settings.default_recent_reviews)
    async with session_scope() as db:
        reviews = await review_service.list_for_business(db, business_id, limit)
    await response.json(200, success_envelope(data=documents(reviews)))


async def create_review(request: Request, response: ResponseWriter) -> None:
    data = validate_payload(ReviewCreate, await parse_body(request))
    async with session_scope() as db:
        review = await review_service.create_review(db, data)
    await response.json(
        201,
        success_envelope(data=review.to_document(), message="Review submitted successfully"),
    )


async def delete_review(request: Request, response: ResponseWriter) -> None:
    review_id = path_uuid(request, "id")
    async with session_scope() as db:
        await review_service.delete_review(db, review_id)
    await response.json(200, success_envelope(message="Review deleted successfully"))


def register_review_routes(router: Router) -> None:
    router.get("/api/reviews/recent", recent_reviews)
    router.get("/api/reviews/business/:businessId", business_reviews)
    router.post("/api/reviews", create_review)
    router.delete("/api/reviews/:id", delete_review)
