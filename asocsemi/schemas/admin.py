"""
Admin dashboard schemas.
"""
from typing import List

from asocsemi.schemas.base import BaseSchema
from asocsemi.schemas.application import JobApplication
from asocsemi.schemas.contact import Contact


class DashboardStats(BaseSchema):
    total_applications: int
    pending_review: int
    contact_messages: int


class ApplicationList(BaseSchema):
    items: List[JobApplication]
    total: int
    errors: List[str] = []


class ContactList(BaseSchema):
    items: List[Contact]
    total: int
    errors: List[str] = []
