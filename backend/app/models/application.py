"""
Gebeta Backend: Business Application Model
==========================================

What:  A request from a business owner to be listed in the catalogue.

Lifecycle:
    1. Submitted through POST /api/applications (status = 'pending')
    2. An admin sets status to 'approved' or 'rejected', optionally with a note
    3. On the first approval a Business row is created and linked via
       business_id; later approvals reuse it
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

APPLICATION_STATUSES = ("pending", "approved", "rejected")


class Application(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "applications"

    business_name: Mapped[str] = mapped_column(String(120), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(30), nullable=False, default="off-campus")
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    admin_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    business_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_applications_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, business_name='{self.business_name}', status='{self.status}')>"
