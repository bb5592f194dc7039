"""
Gebeta Backend: Business Service
================================

What:  Catalogue operations for businesses: list, filter, fetch, create,
       update, delete.
How:   Stateless singleton; every method receives the request's session.
       Persistence failures are logged with context and re-raised as
       DatabaseError. Missing rows become NotFoundError.
Who:   Called by the business route handlers, the application approval
       workflow and the seed command.
"""

import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, InvalidInputError, NotFoundError
from app.models.application import Application
from app.models.business import Business
from app.models.menu_item import MenuItem
from app.models.review import Review
from app.schemas.business import BusinessCreate, BusinessResponse, BusinessUpdate

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


def create_slug(name: str) -> str:
    """
    'Student Center Cafeteria' → 'student-center-cafeteria'

    Lower-cases, trims, drops anything that is not a word character,
    whitespace or hyphen, then joins whitespace runs with '-'.
    """
    slug = _NON_WORD.sub("", name.lower().strip())
    return _WHITESPACE.sub("-", slug)


class BusinessService:
    """
    Business logic layer for the catalogue.

    Responsibilities:
        - list_businesses() / list_featured() / list_by_category()
        - get_business(): single lookup with not-found handling
        - create_business() / update_business(): slug generation + uniqueness
        - delete_business(): removes the business with its menu and reviews
    """

    async def list_businesses(self, db: AsyncSession) -> List[BusinessResponse]:
        return await self._list(db, select(Business), "listing businesses")

    async def list_featured(self, db: AsyncSession) -> List[BusinessResponse]:
        query = select(Business).where(Business.is_featured.is_(True))
        return await self._list(db, query, "listing featured businesses")

    async def list_by_category(self, db: AsyncSession, category: str) -> List[BusinessResponse]:
        # Unknown categories are not an error; they simply match nothing
        query = select(Business).where(Business.category == category)
        return await self._list(db, query, "listing businesses by category")

    async def get_business(self, db: AsyncSession, business_id: uuid.UUID) -> BusinessResponse:
        business = await self.load(db, business_id)
        return BusinessResponse.model_validate(business)

    async def load(self, db: AsyncSession, business_id: uuid.UUID) -> Business:
        """Fetch the ORM row or raise NotFoundError. Shared with other services."""
        try:
            business = await db.get(Business, business_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching business %s: %s", business_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the business. Please try again.",
                context={"business_id": str(business_id)},
            ) from e

        if business is None:
            raise NotFoundError(resource="business", resource_id=str(business_id))
        return business

    async def create_business(self, db: AsyncSession, data: BusinessCreate) -> BusinessResponse:
        fields = data.model_dump(exclude={"slug", "location"})
        if data.location is not None:
            fields["location"] = data.location.model_dump(by_alias=True)
        business = await self.insert(db, slug=data.slug or data.name, **fields)
        logger.info("Business created: %s (%s)", business.id, business.slug)
        return BusinessResponse.model_validate(business)

    async def insert(self, db: AsyncSession, slug: str, **fields: Any) -> Business:
        """
        Add a business row with a unique slug derived from `slug`.

        Raises:
            InvalidInputError: slug is empty after normalisation or taken
            DatabaseError: insert failed
        """
        normalized = await self._unique_slug(db, slug)
        business = Business(slug=normalized, **fields)
        try:
            db.add(business)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating business %s: %s", normalized, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the business. Please try again.",
                context={"slug": normalized, "error_type": type(e).__name__},
            ) from e
        return business

    async def update_business(
        self,
        db: AsyncSession,
        business_id: uuid.UUID,
        data: BusinessUpdate,
    ) -> BusinessResponse:
        business = await self.load(db, business_id)
        # Explicit nulls are ignored; partial updates only set values
        changes: Dict[str, Any] = data.model_dump(
            exclude_unset=True,
            exclude_none=True,
            exclude={"slug", "location"},
        )
        if data.location is not None:
            changes["location"] = data.location.model_dump(by_alias=True)

        # A rename regenerates the slug unless one is given explicitly
        new_slug = data.slug or (data.name if "name" in changes else None)
        if new_slug:
            changes["slug"] = await self._unique_slug(db, new_slug, exclude_id=business.id)

        for field, value in changes.items():
            setattr(business, field, value)

        try:
            await db.flush()
            await db.refresh(business)
        except SQLAlchemyError as e:
            logger.error("Database error updating business %s: %s", business_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the business. Please try again.",
                context={"business_id": str(business_id)},
            ) from e

        logger.info("Business %s updated: %s", business_id, sorted(changes))
        return BusinessResponse.model_validate(business)

    async def delete_business(self, db: AsyncSession, business_id: uuid.UUID) -> None:
        business = await self.load(db, business_id)
        try:
            # Dependants first; SQLite does not enforce foreign key actions by default
            await db.execute(delete(MenuItem).where(MenuItem.business_id == business.id))
            await db.execute(delete(Review).where(Review.business_id == business.id))
            await db.execute(
                update(Application)
                .where(Application.business_id == business.id)
                .values(business_id=None)
            )
            await db.delete(business)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting business %s: %s", business_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the business. Please try again.",
                context={"business_id": str(business_id)},
            ) from e
        logger.info("Business deleted: %s", business_id)

    async def _list(self, db: AsyncSession, query, action: str) -> List[BusinessResponse]:
        try:
            result = await db.execute(query.order_by(Business.created_at, Business.name))
            businesses = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error %s: %s", action, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve businesses. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return [BusinessResponse.model_validate(b) for b in businesses]

    async def _unique_slug(
        self,
        db: AsyncSession,
        source: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> str:
        slug = create_slug(source)
        if not slug:
            raise InvalidInputError(
                message="Business name must contain at least one letter or digit",
                field="name",
            )

        query = select(Business.id).where(Business.slug == slug)
        if exclude_id is not None:
            query = query.where(Business.id != exclude_id)
        try:
            taken = (await db.execute(query)).first() is not None
        except SQLAlchemyError as e:
            logger.error("Database error checking slug %s: %s", slug, str(e))
            raise DatabaseError(context={"slug": slug}) from e

        if taken:
            raise InvalidInputError(
                message=f"A business with the slug '{slug}' already exists",
                field="slug",
            )
        return slug


business_service = BusinessService()
