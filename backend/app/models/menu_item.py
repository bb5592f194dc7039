"""
Gebeta Backend: Menu Item Model
===============================

What:  ORM model for the `menu_items` table; every item belongs to exactly
       one business.

Indexes mirror the two menu queries:
    (business_id, category)    → GET /api/menu/:businessId?category=...
    (business_id, is_popular)  → popular items per business
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.business import Business
from app.models.mixins import RatingMixin, TimestampMixin, UUIDPrimaryKeyMixin


class MenuItem(UUIDPrimaryKeyMixin, TimestampMixin, RatingMixin, Base):
    __tablename__ = "menu_items"

    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="ETB")

    # main, breakfast, fasting, drinks...
    category: Mapped[Optional[str]] = mapped_column(String(60), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_popular: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Only loaded on demand (menu item detail); async sessions cannot lazy-load
    business: Mapped[Business] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_menu_items_business_category", "business_id", "category"),
        Index("idx_menu_items_business_popular", "business_id", "is_popular"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', business_id={self.business_id})>"
