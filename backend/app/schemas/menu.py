"""Request and response contracts for /api/menu."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from app.schemas.business import BusinessSummary
from app.schemas.common import CamelModel, RatingSummary


class MenuItemCreate(CamelModel):
    # Older clients send the owning business as `business`
    business_id: uuid.UUID = Field(
        validation_alias=AliasChoices("businessId", "business", "business_id"),
    )
    name: str = Field(min_length=1, max_length=120)
    price: float = Field(ge=0)
    currency: str = Field(default="ETB", min_length=1, max_length=8)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=60)
    image: Optional[str] = Field(default=None, max_length=500)
    is_available: bool = True
    is_popular: bool = False
    rating: RatingSummary = Field(default_factory=RatingSummary)


class MenuItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=1, max_length=8)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=60)
    image: Optional[str] = Field(default=None, max_length=500)
    is_available: Optional[bool] = None
    is_popular: Optional[bool] = None
    rating: Optional[RatingSummary] = None


class MenuItemResponse(CamelModel):
    id: uuid.UUID
    business_id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: float
    currency: str
    category: Optional[str] = None
    image: Optional[str] = None
    rating: RatingSummary
    is_available: bool
    is_popular: bool
    created_at: datetime
    updated_at: datetime


class MenuItemDetail(MenuItemResponse):
    business: BusinessSummary
