"""
Gebeta Backend: Shared Schema Helpers
=====================================

What:  Base model and helpers shared by every request/response schema.
How:   Field names are snake_case in Python and camelCase on the wire
       (`is_featured` ↔ `isFeatured`), matching the documents the frontend
       already consumes. Both spellings are accepted on input.
"""

from typing import Any, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from app.exceptions import InvalidInputError

ModelT = TypeVar("ModelT", bound="CamelModel")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )

    def to_document(self) -> dict:
        """JSON-safe camelCase dict, ready for the response envelope."""
        return self.model_dump(mode="json", by_alias=True)


def documents(models: Sequence[CamelModel]) -> List[dict]:
    return [model.to_document() for model in models]


class RatingSummary(CamelModel):
    average: float = Field(default=0.0, ge=0, le=5, description="Mean star rating, 0 when unrated")
    count: int = Field(default=0, ge=0, description="Number of ratings received")


class HealthResponse(CamelModel):
    status: str = Field(description="Human-readable liveness message")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    assistant: str = Field(description="Chat assistant: available, unavailable, disabled")
    uptime_seconds: float = Field(description="Seconds since service started")


def validate_payload(model_cls: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a parsed request body against a schema.

    Raises:
        InvalidInputError: naming the first offending field, e.g.
            "price: Field required". Pydantic's full error list is kept in
            the exception context for the server log.
    """
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first['msg']}" if location else first["msg"]
        raise InvalidInputError(
            message=message,
            field=location or None,
            context={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc
