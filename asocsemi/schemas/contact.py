"""
Contact form schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from asocsemi.schemas.base import BaseSchema, blank_to_none


class ContactCreate(BaseSchema):
    """Contact form submission."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=40)
    company: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1)

    @field_validator("name", "message", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", "company", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value) if isinstance(value, str) else value


class Contact(BaseSchema):
    """Stored contact message."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    message: str
    created_at: datetime
