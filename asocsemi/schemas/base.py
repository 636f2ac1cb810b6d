"""
Base schemas and common response models.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Form fields left empty are stored as null."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str


class ErrorResponse(BaseSchema):
    """Error response format."""

    error: str
    message: str
    details: Optional[Any] = None
