"""
Job application schemas.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from asocsemi.schemas.base import BaseSchema, blank_to_none


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"


class JobApplicationCreate(BaseSchema):
    """Application submitted from the Careers page."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=40)
    position: str = Field(..., min_length=1, max_length=255)
    experience: str = Field(..., min_length=1, max_length=100)
    cover_letter: Optional[str] = None

    @field_validator("full_name", "phone", "position", "experience", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("cover_letter", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value) if isinstance(value, str) else value


class JobApplication(BaseSchema):
    """Stored job application."""

    id: str
    user_id: Optional[str] = None
    full_name: str
    email: str
    phone: str
    position: str
    experience: str
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    status: str = ApplicationStatus.PENDING.value
    created_at: datetime


class StatusUpdate(BaseSchema):
    """Admin status change for one application."""

    status: ApplicationStatus
