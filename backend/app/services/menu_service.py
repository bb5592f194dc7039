"""
Gebeta Backend: Menu Service
============================

What:  Menu items per business: filtered listing, top-rated items, detail
       with the owning business, create, update, delete.
How:   Same shape as BusinessService: stateless, session per call,
       NotFoundError for missing rows, DatabaseError for persistence failures.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.exceptions import DatabaseError, NotFoundError
from app.models.menu_item import MenuItem
from app.schemas.menu import MenuItemCreate, MenuItemDetail, MenuItemResponse, MenuItemUpdate
from app.services.business_service import business_service

logger = logging.getLogger(__name__)


class MenuService:

    async def list_for_business(
        self,
        db: AsyncSession,
        business_id: uuid.UUID,
        category: Optional[str] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItemResponse]:
        """
        Menu of one business. An unknown business yields an empty list.

        Args:
            category: exact match on the item category when given
            available: filter on is_available when not None
        """
        query = select(MenuItem).where(MenuItem.business_id == business_id)
        if category:
            query = query.where(MenuItem.category == category)
        if available is not None:
            query = query.where(MenuItem.is_available.is_(available))
        query = query.order_by(MenuItem.created_at, MenuItem.name)
        return await self._list(db, query, business_id)

    async def top_items(
        self,
        db: AsyncSession,
        business_id: uuid.UUID,
        limit: int,
    ) -> List[MenuItemResponse]:
        query = (
            select(MenuItem)
            .where(MenuItem.business_id == business_id)
            .order_by(MenuItem.rating_average.desc(), MenuItem.rating_count.desc(), MenuItem.name)
            .limit(limit)
        )
        return await self._list(db, query, business_id)

    async def get_item(self, db: AsyncSession, item_id: uuid.UUID) -> MenuItemDetail:
        query = (
            select(MenuItem)
            .options(joinedload(MenuItem.business))
            .where(MenuItem.id == item_id)
        )
        try:
            item = (await db.execute(query)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching menu item %s: %s", item_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the menu item. Please try again.",
                context={"item_id": str(item_id)},
            ) from e

        if item is None:
            raise NotFoundError(resource="menu item", resource_id=str(item_id))
        return MenuItemDetail.model_validate(item)

    async def create_item(self, db: AsyncSession, data: MenuItemCreate) -> MenuItemResponse:
        # 404 when the owning business does not exist
        business = await business_service.load(db, data.business_id)

        fields = data.model_dump(exclude={"business_id", "rating"})
        item = MenuItem(**fields, business_id=business.id)
        item.rating_average = data.rating.average
        item.rating_count = data.rating.count
        try:
            db.add(item)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating menu item: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the menu item. Please try again.",
                context={"business_id": str(business.id)},
            ) from e

        logger.info("Menu item created: %s for business %s", item.id, business.id)
        return MenuItemResponse.model_validate(item)

    async def update_item(
        self,
        db: AsyncSession,
        item_id: uuid.UUID,
        data: MenuItemUpdate,
    ) -> MenuItemResponse:
        item = await self._load(db, item_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        rating = changes.pop("rating", None)
        for field, value in changes.items():
            setattr(item, field, value)
        if rating is not None:
            item.rating_average = rating.get("average", item.rating_average)
            item.rating_count = rating.get("count", item.rating_count)
            changes["rating"] = rating

        try:
            await db.flush()
            await db.refresh(item)
        except SQLAlchemyError as e:
            logger.error("Database error updating menu item %s: %s", item_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the menu item. Please try again.",
                context={"item_id": str(item_id)},
            ) from e

        logger.info("Menu item %s updated: %s", item_id, sorted(changes))
        return MenuItemResponse.model_validate(item)

    async def delete_item(self, db: AsyncSession, item_id: uuid.UUID) -> None:
        item = await self._load(db, item_id)
        try:
            await db.delete(item)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting menu item %s: %s", item_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the menu item. Please try again.",
                context={"item_id": str(item_id)},
            ) from e
        logger.info("Menu item deleted: %s", item_id)

    async def _load(self, db: AsyncSession, item_id: uuid.UUID) -> MenuItem:
        try:
            item = await db.get(MenuItem, item_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching menu item %s: %s", item_id, str(e))
            raise DatabaseError(context={"item_id": str(item_id)}) from e
        if item is None:
            raise NotFoundError(resource="menu item", resource_id=str(item_id))
        return item

    async def _list(self, db: AsyncSession, query, business_id: uuid.UUID) -> List[MenuItemResponse]:
        try:
            items = (await db.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing menu for %s: %s", business_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the menu. Please try again.",
                context={"business_id": str(business_id)},
            ) from e
        return [MenuItemResponse.model_validate(item) for item in items]


menu_service = MenuService()
