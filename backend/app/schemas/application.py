"""
Gebeta Backend: Business Application Schemas
============================================

What:  Contracts for the registration/approval workflow (/api/applications).
"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from app.schemas.business import BusinessCategory
from app.schemas.common import CamelModel

ApplicationStatus = Literal["pending", "approved", "rejected"]


class ApplicationCreate(CamelModel):
    business_name: str = Field(min_length=1, max_length=120)
    location: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: BusinessCategory = "off-campus"
    contact_email: Optional[str] = Field(default=None, max_length=255)


class ApplicationUpdate(CamelModel):
    """Admin decision and/or note. At least one of the two must be present."""

    status: Optional[ApplicationStatus] = None
    admin_note: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def require_change(self) -> "ApplicationUpdate":
        if self.status is None and self.admin_note is None:
            raise ValueError("Provide a status, an adminNote, or both")
        return self


class ApplicationResponse(CamelModel):
    id: uuid.UUID
    business_name: str
    location: str
    description: Optional[str] = None
    category: str
    contact_email: Optional[str] = None
    status: str
    admin_note: Optional[str] = None
    business_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime
