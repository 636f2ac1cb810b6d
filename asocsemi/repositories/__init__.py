"""
Repository layer - data access abstraction.

Repositories handle all calls against backend collections, keeping
collection names and result unwrapping out of the service and route layers.
"""
from asocsemi.repositories.base import BaseRepository
from asocsemi.repositories.contact_repository import ContactRepository
from asocsemi.repositories.application_repository import ApplicationRepository
from asocsemi.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ContactRepository",
    "ApplicationRepository",
    "UserRepository",
]
