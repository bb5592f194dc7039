"""
Gebeta Backend: Review Service
==============================

What:  Customer reviews and the rating aggregate they feed.
How:   Every write folds the review's stars into the owning business's
       running `rating_average` (rounded to 2 decimals) and `rating_count`
       in the same transaction. Seeded listings carry aggregates with no
       review rows behind them, so the aggregate is adjusted, never
       recomputed from the reviews table. Concurrent writers are not
       coordinated; the last commit wins.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.business import Business
from app.models.review import Review
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services.business_service import business_service

logger = logging.getLogger(__name__)


class ReviewService:

    async def create_review(self, db: AsyncSession, data: ReviewCreate) -> ReviewResponse:
        business = await business_service.load(db, data.business_id)

        review = Review(**data.model_dump())
        try:
            db.add(review)
            await db.flush()
            self._apply_rating(business, review.rating, added=True)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating review: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the review. Please try again.",
                context={"business_id": str(business.id)},
            ) from e

        logger.info(
            "Review %s added to business %s (rating now %.2f over %d)",
            review.id, business.id, business.rating_average, business.rating_count,
        )
        return ReviewResponse.model_validate(review)

    async def list_for_business(
        self,
        db: AsyncSession,
        business_id: uuid.UUID,
        limit: int,
    ) -> List[ReviewResponse]:
        query = (
            select(Review)
            .where(Review.business_id == business_id)
            .order_by(Review.created_at.desc())
            .limit(limit)
        )
        return await self._list(db, query)

    async def recent(self, db: AsyncSession, limit: int) -> List[ReviewResponse]:
        query = select(Review).order_by(Review.created_at.desc()).limit(limit)
        return await self._list(db, query)

    async def delete_review(self, db: AsyncSession, review_id: uuid.UUID) -> None:
        try:
            review = await db.get(Review, review_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching review %s: %s", review_id, str(e))
            raise DatabaseError(context={"review_id": str(review_id)}) from e
        if review is None:
            raise NotFoundError(resource="review", resource_id=str(review_id))

        try:
            business = await db.get(Business, review.business_id)
            await db.delete(review)
            await db.flush()
            if business is not None:
                self._apply_rating(business, review.rating, added=False)
                await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting review %s: %s", review_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the review. Please try again.",
                context={"review_id": str(review_id)},
            ) from e
        logger.info("Review deleted: %s", review_id)

    def _apply_rating(self, business: Business, stars: int, added: bool) -> None:
        """
        Fold one review into the business's running aggregate.

        The aggregate may include ratings that predate the reviews table
        (seeded listings), so it is adjusted in place rather than recomputed.
        """
        total = business.rating_average * business.rating_count
        if added:
            count = business.rating_count + 1
            total += stars
        else:
            count = business.rating_count - 1
            total -= stars

        if count <= 0:
            business.rating_average = 0.0
            business.rating_count = 0
            return
        business.rating_average = round(min(max(total / count, 0.0), 5.0), 2)
        business.rating_count = count

    async def _list(self, db: AsyncSession, query) -> List[ReviewResponse]:
        try:
            reviews = (await db.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing reviews: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not retrieve reviews. Please try again.") from e
        return [ReviewResponse.model_validate(r) for r in reviews]


review_service = ReviewService()
