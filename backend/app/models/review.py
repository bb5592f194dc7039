"""ORM model for customer reviews of a business."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import UUIDPrimaryKeyMixin, utcnow


class Review(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "reviews"

    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
    )
    author: Mapped[str] = mapped_column(String(80), nullable=False, default="Anonymous")

    # 1..5 stars, validated by ReviewCreate
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_reviews_business_created", "business_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, business_id={self.business_id}, rating={self.rating})>"
