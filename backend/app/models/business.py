"""
Gebeta Backend: Business Model
==============================

What:  ORM model for the `businesses` table: cafeterias, delivery services
       and off-campus restaurants listed in the catalogue.
Who:   BusinessService, ReviewService (rating aggregate) and
       ApplicationService (approved applications become businesses).

Query Patterns:
    - List all:        ORDER BY created_at
    - Featured:        WHERE is_featured
    - By category:     WHERE category = :category  → idx_businesses_category
    - By slug:         uniqueness check on create   → unique constraint
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import RatingMixin, TimestampMixin, UUIDPrimaryKeyMixin

BUSINESS_CATEGORIES = ("on-campus", "off-campus", "delivery")


class Business(UUIDPrimaryKeyMixin, TimestampMixin, RatingMixin, Base):
    __tablename__ = "businesses"

    name: Mapped[str] = mapped_column(String(120), nullable=False)

    # URL-friendly name, generated by create_slug() when not supplied
    slug: Mapped[str] = mapped_column(String(160), nullable=False, unique=True)

    # One of BUSINESS_CATEGORIES
    category: Mapped[str] = mapped_column(String(30), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Nested document, e.g. {"address": "South Gate", "campus": "Main"}
    location: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_businesses_category", "category"),
        Index("idx_businesses_featured", "is_featured"),
    )

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, slug='{self.slug}', category='{self.category}')>"
