"""Request and response contracts for /api/reviews."""

import uuid
from datetime import datetime

from pydantic import AliasChoices, Field

from app.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    business_id: uuid.UUID = Field(
        validation_alias=AliasChoices("businessId", "business", "business_id"),
    )
    rating: int = Field(ge=1, le=5, description="Star rating, 1 to 5")
    body: str = Field(min_length=1, max_length=5000)
    author: str = Field(default="Anonymous", min_length=1, max_length=80)


class ReviewResponse(CamelModel):
    id: uuid.UUID
    business_id: uuid.UUID
    author: str
    rating: int
    body: str
    created_at: datetime
