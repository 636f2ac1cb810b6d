"""
User profile row, maintained by the identity provider.
"""
from datetime import datetime
from typing import Optional

from asocsemi.schemas.base import BaseSchema


class User(BaseSchema):
    """Row in the users collection."""

    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
