"""
Gebeta Backend: Business Schemas
================================

What:  Request and response contracts for /api/businesses.
Why:   Schemas are separate from the ORM model so the wire format
       (camelCase, nested `rating`) can differ from the table layout.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import ConfigDict, Field

from app.schemas.common import CamelModel, RatingSummary

BusinessCategory = Literal["on-campus", "off-campus", "delivery"]


class Location(CamelModel):
    """Free-form location document; `address` is the only required key."""

    model_config = ConfigDict(extra="allow")

    address: str = Field(min_length=1, max_length=255)


class BusinessCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    category: BusinessCategory
    slug: Optional[str] = Field(default=None, max_length=160)
    description: Optional[str] = None
    location: Optional[Location] = None
    phone: Optional[str] = Field(default=None, max_length=40)
    image: Optional[str] = Field(default=None, max_length=500)
    is_featured: bool = False


class BusinessUpdate(CamelModel):
    """Partial update: only the fields present in the body are applied."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    category: Optional[BusinessCategory] = None
    slug: Optional[str] = Field(default=None, max_length=160)
    description: Optional[str] = None
    location: Optional[Location] = None
    phone: Optional[str] = Field(default=None, max_length=40)
    image: Optional[str] = Field(default=None, max_length=500)
    is_featured: Optional[bool] = None


class BusinessResponse(CamelModel):
    id: uuid.UUID
    name: str
    slug: str
    category: str
    description: Optional[str] = None
    location: Optional[Dict[str, Any]] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    rating: RatingSummary
    is_featured: bool
    created_at: datetime
    updated_at: datetime


class BusinessSummary(CamelModel):
    """Populated `business` reference on menu item detail."""

    id: uuid.UUID
    name: str
    location: Optional[Dict[str, Any]] = None
